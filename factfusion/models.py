"""
Pydantic models for Fact Fusion requests, responses and client state.

Facts travel over the wire with camelCase field names (``votesInteresting``,
``createdIn``) and are exposed to Python code under snake_case names.
"""

from datetime import datetime
from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, Field, field_validator

from factfusion.categories import ALL_CATEGORIES
from factfusion.validation import is_well_formed_source


# =============================================================================
# Enums
# =============================================================================


class VoteColumn(str, Enum):
    """The three vote counters a fact carries."""
    INTERESTING = "votesInteresting"
    MINDBLOWING = "votesMindblowing"
    FALSE = "votesFalse"


# =============================================================================
# Fact
# =============================================================================


class Fact(BaseModel):
    """
    A single user-submitted claim as stored by the remote store.

    The category is not re-validated on read; rows are trusted as returned.
    """

    id: int
    text: str
    source: str
    category: str

    votes_interesting: int = Field(default=0, ge=0, alias="votesInteresting")
    votes_mindblowing: int = Field(default=0, ge=0, alias="votesMindblowing")
    votes_false: int = Field(default=0, ge=0, alias="votesFalse")

    created_in: int = Field(..., alias="createdIn")

    class Config:
        from_attributes = True
        populate_by_name = True
        frozen = True


# =============================================================================
# Request Models
# =============================================================================


class CreateFactRequest(BaseModel):
    """
    Request to store a new fact.

    Only the source URL is checked here; category and text length are
    enforced by the table constraints.
    """

    text: str = Field(..., description="The claim itself")
    source: str = Field(..., description="Absolute http(s) URL backing the claim")
    category: str = Field(..., description="One of the known categories")

    @field_validator('source')
    @classmethod
    def validate_source(cls, v):
        """Ensure the source is an absolute http(s) URL."""
        if not is_well_formed_source(v):
            raise ValueError(f'Invalid URL: {v}')
        return v


class VoteRequest(BaseModel):
    """Request to add one vote to a fact."""

    column: VoteColumn = Field(..., description="Which counter to increment")


# =============================================================================
# Response Models
# =============================================================================


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = "healthy"
    version: str
    database_connected: bool
    facts_count: int = 0
    latest_fact_at: Optional[datetime] = None


# =============================================================================
# Client State
# =============================================================================


class CollectionSnapshot(BaseModel):
    """
    Read-only view of the facts currently shown.

    A new snapshot replaces the previous one on every transition.
    """

    facts: Tuple[Fact, ...] = ()
    filter: str = ALL_CATEGORIES
    is_loading: bool = False

    class Config:
        frozen = True
