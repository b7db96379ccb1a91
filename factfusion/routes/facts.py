"""
API routes for listing, creating and voting on facts.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Header, Query
from sqlalchemy import desc, func, select, text, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from factfusion.categories import ALL_CATEGORIES
from factfusion.config import get_settings
from factfusion.database import get_db, FactRecord
from factfusion.models import (
    CreateFactRequest, Fact, HealthResponse, VoteColumn, VoteRequest
)


logger = logging.getLogger(__name__)

settings = get_settings()


def require_api_key(x_api_key: Optional[str] = Header(default=None)):
    """Check the shared service key if one is configured."""
    if settings.api_key and x_api_key != settings.api_key:
        raise HTTPException(status_code=403, detail="Invalid API key")


router = APIRouter(
    prefix="/facts", tags=["Facts"], dependencies=[Depends(require_api_key)]
)


# Maps a wire column name to the mapped attribute it increments
_VOTE_ATTRIBUTES = {
    VoteColumn.INTERESTING: "votes_interesting",
    VoteColumn.MINDBLOWING: "votes_mindblowing",
    VoteColumn.FALSE: "votes_false",
}


# =============================================================================
# List Facts
# =============================================================================


@router.get("/", response_model=List[Fact])
def list_facts(
    category: Optional[str] = Query(default=None),
    limit: int = Query(default=settings.max_facts, ge=1, le=settings.max_facts),
    db: Session = Depends(get_db)
) -> List[Fact]:
    """
    List facts, most interesting first.

    Passing no category or "all" returns every category.
    """
    query = select(FactRecord)
    if category and category != ALL_CATEGORIES:
        query = query.where(FactRecord.category == category)

    query = query.order_by(
        desc(FactRecord.votes_interesting), FactRecord.id
    ).limit(limit)

    return [_fact_to_response(f) for f in db.scalars(query).all()]


# =============================================================================
# Create Fact
# =============================================================================


@router.post("/", response_model=Fact, status_code=201)
def create_fact(
    request: CreateFactRequest,
    db: Session = Depends(get_db)
) -> Fact:
    """
    Store a new fact.

    The store assigns the id, zeroes the vote counters and stamps the
    current year. The full row is returned so clients never have to
    construct one themselves.
    """
    fact = FactRecord(
        text=request.text,
        source=request.source,
        category=request.category,
    )
    db.add(fact)

    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.info(f"Rejected fact in category {request.category!r}: {e.orig}")
        raise HTTPException(status_code=409, detail="Fact violates a table constraint")

    db.refresh(fact)
    logger.info(f"Created fact {fact.id} in {fact.category}")
    return _fact_to_response(fact)


# =============================================================================
# Vote
# =============================================================================


@router.post("/{fact_id}/votes", response_model=Fact)
def add_vote(
    fact_id: int,
    request: VoteRequest,
    db: Session = Depends(get_db)
) -> Fact:
    """
    Add one vote to a fact and return the updated row.

    The increment runs as a single UPDATE ... RETURNING inside the
    database; the response is the row that statement wrote. The client
    never supplies the new value.
    """
    column = getattr(FactRecord, _VOTE_ATTRIBUTES[request.column])

    try:
        fact = db.execute(
            update(FactRecord)
            .where(FactRecord.id == fact_id)
            .values({column: column + 1})
            .returning(FactRecord)
            .execution_options(synchronize_session=False, populate_existing=True)
        ).scalar_one_or_none()
        response = _fact_to_response(fact) if fact is not None else None
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception(f"Error incrementing {request.column.value} on fact {fact_id}")
        raise

    if response is None:
        raise HTTPException(status_code=404, detail="Fact not found")

    return response


# =============================================================================
# Health Check
# =============================================================================


@router.get("/health", response_model=HealthResponse)
def health_check(db: Session = Depends(get_db)):
    """
    Health check endpoint.

    Returns service health status and basic statistics.
    """
    try:
        db.execute(text("SELECT 1"))
        db_connected = True
    except SQLAlchemyError:
        db_connected = False

    if not db_connected:
        return HealthResponse(
            status="degraded",
            version=settings.app_version,
            database_connected=False
        )

    facts_count = db.scalar(select(func.count(FactRecord.id))) or 0
    latest = db.scalar(select(func.max(FactRecord.created_at)))

    return HealthResponse(
        status="healthy",
        version=settings.app_version,
        database_connected=True,
        facts_count=facts_count,
        latest_fact_at=latest
    )


# =============================================================================
# Helper Functions
# =============================================================================


def _fact_to_response(fact: FactRecord) -> Fact:
    """Convert database FactRecord to response model."""
    return Fact(
        id=fact.id,
        text=fact.text,
        source=fact.source,
        category=fact.category,
        votes_interesting=fact.votes_interesting,
        votes_mindblowing=fact.votes_mindblowing,
        votes_false=fact.votes_false,
        created_in=fact.created_in
    )
