"""Shared test fixtures for Fact Fusion."""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from factfusion.app import app as fastapi_app
from factfusion.categories import ALL_CATEGORIES
from factfusion.database import Base, FactRecord, get_db
from factfusion.gateway import RemoteFailure
from factfusion.models import Fact, VoteColumn


_VOTE_FIELDS = {
    VoteColumn.INTERESTING: "votes_interesting",
    VoteColumn.MINDBLOWING: "votes_mindblowing",
    VoteColumn.FALSE: "votes_false",
}


class FakeGateway:
    """In-memory stand-in for RemoteFactGateway."""

    def __init__(self, facts=()):
        self.rows = {f.id: f for f in facts}
        self.next_id = max(self.rows, default=0) + 1
        self.failure = None
        self.calls = []

    async def list_facts(self, category=ALL_CATEGORIES):
        self.calls.append(("list", category))
        if self.failure:
            raise self.failure
        rows = [
            f for f in self.rows.values()
            if category == ALL_CATEGORIES or f.category == category
        ]
        return sorted(rows, key=lambda f: f.votes_interesting, reverse=True)

    async def insert_fact(self, text, source, category):
        self.calls.append(("insert", text, source, category))
        if self.failure:
            raise self.failure
        fact = Fact(
            id=self.next_id, text=text, source=source, category=category, created_in=2026
        )
        self.rows[fact.id] = fact
        self.next_id += 1
        return fact

    async def increment_vote(self, fact_id, column):
        self.calls.append(("vote", fact_id, VoteColumn(column)))
        if self.failure:
            raise self.failure
        field = _VOTE_FIELDS[VoteColumn(column)]
        fact = self.rows[fact_id]
        updated = fact.model_copy(update={field: getattr(fact, field) + 1})
        self.rows[fact_id] = updated
        return updated


@pytest.fixture
def make_fact():
    """Build Fact values with sensible defaults."""
    def _make(id=1, **fields):
        defaults = {
            "text": f"Fact number {id}",
            "source": "https://example.com",
            "category": "science",
            "created_in": 2024,
        }
        defaults.update(fields)
        return Fact(id=id, **defaults)
    return _make


@pytest.fixture
def sample_facts(make_fact):
    """Three facts already sorted by interesting votes."""
    return [
        make_fact(1, category="technology", votes_interesting=24, votes_mindblowing=9, votes_false=4),
        make_fact(2, category="society", votes_interesting=11, votes_mindblowing=2),
        make_fact(3, category="society", votes_interesting=8, votes_mindblowing=3, votes_false=1),
    ]


@pytest.fixture
def gateway(sample_facts):
    return FakeGateway(sample_facts)


@pytest.fixture
def notifications():
    """Notifier that records (message, failure) pairs."""
    received = []

    def _notify(message: str, failure: RemoteFailure):
        received.append((message, failure))

    _notify.received = received
    return _notify


# =============================================================================
# Store fixtures
# =============================================================================


@pytest.fixture
def engine():
    """Fresh in-memory database per test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def app(session_factory):
    """The store app wired to the test database."""
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    fastapi_app.dependency_overrides[get_db] = override_get_db
    yield fastapi_app
    fastapi_app.dependency_overrides.clear()


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def add_fact(session_factory):
    """Insert a row directly and return its id."""
    def _add(**fields):
        values = {
            "text": "A stored fact",
            "source": "https://example.com",
            "category": "science",
        }
        values.update(fields)
        with session_factory() as db:
            record = FactRecord(**values)
            db.add(record)
            db.commit()
            return record.id
    return _add
