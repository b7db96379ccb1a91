"""
Routes package for the Fact Fusion store.
"""

from factfusion.routes.facts import router as facts_router

__all__ = ["facts_router"]
