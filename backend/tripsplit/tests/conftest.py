"""
Shared fixtures: an isolated in-memory database and a client bound to it.
"""
from datetime import date, datetime
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from tripsplit.db.base import Base
from tripsplit.db.session import get_db
from tripsplit.main import app
from tripsplit.models import Member, Trip, TripMember, MembershipStatus, Expense, ExpenseShare


@pytest.fixture
def db():
    """Fresh in-memory SQLite session with all tables created."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )
    Base.metadata.create_all(bind=engine)
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db):
    """Test client whose requests use the in-memory session."""
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def seeded_trip(db):
    """
    Trip with three active members and one who left.

    Carol joined first, then Alice, then Bob. USD: Alice paid 90.00 and Bob
    paid 60.00, both split three ways. EUR: Carol paid 30.00 split three ways.
    """
    alice = Member(display_name="Alice")
    bob = Member(display_name="Bob")
    carol = Member(display_name="Carol")
    dave = Member(display_name="Dave")
    db.add_all([alice, bob, carol, dave])
    db.flush()

    trip = Trip(name="Lisbon", start_date=date(2024, 5, 1), end_date=date(2024, 5, 7), currency="USD")
    db.add(trip)
    db.flush()

    db.add_all([
        TripMember(trip_id=trip.id, member_id=alice.id, joined_at=datetime(2024, 4, 2)),
        TripMember(trip_id=trip.id, member_id=bob.id, joined_at=datetime(2024, 4, 3)),
        TripMember(trip_id=trip.id, member_id=carol.id, joined_at=datetime(2024, 4, 1)),
        TripMember(
            trip_id=trip.id, member_id=dave.id, joined_at=datetime(2024, 3, 1),
            status=MembershipStatus.LEFT
        ),
    ])

    dinner = Expense(trip_id=trip.id, payer_id=alice.id, amount_cents=9000, currency="USD", spent_at=date(2024, 5, 1))
    museum = Expense(trip_id=trip.id, payer_id=bob.id, amount_cents=6000, currency="USD", spent_at=date(2024, 5, 2))
    taxi = Expense(trip_id=trip.id, payer_id=carol.id, amount_cents=3000, currency="EUR", spent_at=date(2024, 5, 1))
    db.add_all([dinner, museum, taxi])
    db.flush()

    for member in (alice, bob, carol):
        db.add(ExpenseShare(expense_id=dinner.id, member_id=member.id, share_cents=3000))
        db.add(ExpenseShare(expense_id=museum.id, member_id=member.id, share_cents=2000))
        db.add(ExpenseShare(expense_id=taxi.id, member_id=member.id, share_cents=1000))
    db.commit()

    return {
        "trip": trip,
        "alice": alice,
        "bob": bob,
        "carol": carol,
        "dave": dave,
        "dinner": dinner,
        "museum": museum,
        "taxi": taxi,
    }
