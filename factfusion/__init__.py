"""
Fact Fusion: community-submitted facts with category filters and voting.

The package contains two halves:
- A client core that keeps a local list of facts in sync with the store,
  validates submissions and enforces one vote per fact per session
- A small store service (FastAPI + SQLAlchemy) acting as the system of record
"""

__version__ = "0.1.0"
