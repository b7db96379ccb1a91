"""
Database models and session management for the Fact Fusion store.

Uses SQLAlchemy with SQLite for the standalone service.
Can be configured for PostgreSQL in production.
"""

from datetime import datetime, UTC

from sqlalchemy import (
    CheckConstraint, Integer, String, Text, DateTime, create_engine, func, select
)
from sqlalchemy.orm import DeclarativeBase, sessionmaker, Mapped, mapped_column

from factfusion.categories import Category
from factfusion.config import get_settings
from factfusion.validation import MAX_TEXT_LENGTH


# =============================================================================
# Database Setup
# =============================================================================


class Base(DeclarativeBase):
    """Base class for all database models."""
    pass


def get_engine():
    """Create database engine."""
    settings = get_settings()
    return create_engine(
        settings.database_url,
        connect_args={"check_same_thread": False} if "sqlite" in settings.database_url else {},
        echo=settings.debug
    )


engine = get_engine()
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    """Dependency to get database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind=None, seed: bool = False):
    """Initialize database tables, optionally seeding an empty table."""
    bind = bind or engine
    Base.metadata.create_all(bind=bind)
    if seed:
        with sessionmaker(bind=bind)() as db:
            seed_sample_facts(db)


# =============================================================================
# Database Models
# =============================================================================


_CATEGORY_LIST = ", ".join(f"'{c.value}'" for c in Category)


class FactRecord(Base):
    """
    A community-submitted fact.

    Column names follow the wire format so the table can be queried
    directly by other clients of the store.
    """

    __tablename__ = "facts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)

    text: Mapped[str] = mapped_column(Text, nullable=False)
    source: Mapped[str] = mapped_column(String(2048), nullable=False)
    category: Mapped[str] = mapped_column(String(30), index=True, nullable=False)

    # Only ever incremented, in place, by the store
    votes_interesting: Mapped[int] = mapped_column(
        "votesInteresting", Integer, default=0, index=True, nullable=False
    )
    votes_mindblowing: Mapped[int] = mapped_column(
        "votesMindblowing", Integer, default=0, nullable=False
    )
    votes_false: Mapped[int] = mapped_column(
        "votesFalse", Integer, default=0, nullable=False
    )

    created_in: Mapped[int] = mapped_column(
        "createdIn", Integer, default=lambda: datetime.now(UTC).year, nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=lambda: datetime.now(UTC), nullable=False
    )

    __table_args__ = (
        CheckConstraint(f"category IN ({_CATEGORY_LIST})", name="ck_facts_category"),
        CheckConstraint(
            f"length(text) BETWEEN 1 AND {MAX_TEXT_LENGTH}", name="ck_facts_text_length"
        ),
    )


# =============================================================================
# Sample Data
# =============================================================================


SAMPLE_FACTS = [
    {
        "text": "React is being developed by Meta (formerly facebook)",
        "source": "https://opensource.fb.com/",
        "category": Category.TECHNOLOGY.value,
        "votes_interesting": 24,
        "votes_mindblowing": 9,
        "votes_false": 4,
        "created_in": 2021,
    },
    {
        "text": (
            "Millennial dads spend 3 times as much time with their kids than their "
            "fathers spent with them. In 1982, 43% of fathers had never changed a "
            "diaper. Today, that number is down to 3%"
        ),
        "source": "https://www.mother.ly/parenting/millennial-dads-spend-more-time-with-their-kids",
        "category": Category.SOCIETY.value,
        "votes_interesting": 11,
        "votes_mindblowing": 2,
        "votes_false": 0,
        "created_in": 2019,
    },
    {
        "text": "Lisbon is the capital of Portugal",
        "source": "https://en.wikipedia.org/wiki/Lisbon",
        "category": Category.SOCIETY.value,
        "votes_interesting": 8,
        "votes_mindblowing": 3,
        "votes_false": 1,
        "created_in": 2015,
    },
]


def seed_sample_facts(db) -> int:
    """Insert the sample facts if the table is empty. Returns rows added."""
    existing = db.scalar(select(func.count(FactRecord.id))) or 0
    if existing:
        return 0
    db.add_all(FactRecord(**row) for row in SAMPLE_FACTS)
    db.commit()
    return len(SAMPLE_FACTS)
