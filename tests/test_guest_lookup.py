"""
Tests for token-based guest lookup
"""

import pytest
from datetime import date
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from table_manager.core.db import Base
from table_manager.core.errors import NotFound
from table_manager.schemas.party import PartyCreate
from table_manager.schemas.table import TableSpec
from table_manager.services.event_service import EventService
from table_manager.services.guest_service import GuestService
from table_manager.services.layout_service import LayoutService
from table_manager.services.party_service import PartyService
from table_manager.services.qr_service import QRService
from table_manager.services.seating_service import SeatingService

# Test database setup
SQLALCHEMY_DATABASE_URL = "sqlite:///./test_lookup.db"
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

@pytest.fixture
def db_session():
    """Create test database session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)

@pytest.fixture
def sample_event_with_parties(db_session):
    """Create a sample event with parties for testing"""
    event = EventService.create_event(db_session, "Test Wedding", date(2026, 6, 15), venue="Rose Garden")
    a1, b1 = LayoutService.bulk_create_tables(db_session, event.id, [
        TableSpec(table_name="A1", capacity=10),
        TableSpec(table_name="B1", capacity=8),
    ])
    john = PartyService.add_party(db_session, event.id, PartyCreate(
        name="John Doe", email="john@example.com", party_size=2, table_id=a1.id
    ))
    jane = PartyService.add_party(db_session, event.id, PartyCreate(name="Jane Smith", table_id=b1.id))
    walk_in = PartyService.add_party(db_session, event.id, PartyCreate(name="Walk In"))
    SeatingService.claim_seat(db_session, a1.id, 3, john.id, 1)
    SeatingService.claim_seat(db_session, a1.id, 4, john.id, 2)
    SeatingService.claim_seat(db_session, b1.id, 1, jane.id, 1)
    return {"event": event, "tables": (a1, b1), "john": john, "jane": jane, "walk_in": walk_in}

def test_resolve_guest(db_session, sample_event_with_parties):
    john = sample_event_with_parties["john"]
    a1, _ = sample_event_with_parties["tables"]
    
    view = GuestService.resolve_guest(db_session, john.token)
    
    assert view.name == "John Doe"
    assert view.email == "john@example.com"
    assert view.party_size == 2
    assert view.table_id == a1.id
    assert view.table_name == "A1"
    assert view.table_capacity == 10
    assert (view.position_x, view.position_y) == (100, 100)
    assert view.event_name == "Test Wedding"
    assert view.event_date == date(2026, 6, 15)
    assert view.event_venue == "Rose Garden"
    assert [(s.seat_number, s.member_number) for s in view.seats] == [(3, 1), (4, 2)]

def test_resolve_guest_without_table(db_session, sample_event_with_parties):
    view = GuestService.resolve_guest(db_session, sample_event_with_parties["walk_in"].token)
    
    assert view.name == "Walk In"
    assert view.table_id is None
    assert view.table_name is None
    assert view.position_x is None
    assert view.seats == []
    assert view.event_name == "Test Wedding"

def test_resolve_guest_only_exposes_own_party(db_session, sample_event_with_parties):
    view = GuestService.resolve_guest(db_session, sample_event_with_parties["jane"].token)
    dumped = str(view.model_dump())
    
    assert "Jane Smith" in dumped
    assert "John Doe" not in dumped
    assert "john@example.com" not in dumped

@pytest.mark.parametrize("token", ["", "not-a-real-token"])
def test_resolve_unknown_token(db_session, sample_event_with_parties, token):
    with pytest.raises(NotFound):
        GuestService.resolve_guest(db_session, token)
    with pytest.raises(NotFound):
        GuestService.resolve_layout(db_session, token)

def test_resolve_layout(db_session, sample_event_with_parties):
    jane = sample_event_with_parties["jane"]
    a1, b1 = sample_event_with_parties["tables"]
    
    layout = GuestService.resolve_layout(db_session, jane.token)
    
    assert [t.table_name for t in layout.tables] == ["A1", "B1"]
    assert layout.guest_table_id == b1.id
    assert [i.icon_type for i in layout.icons] == ["stage"]
    
    dumped = str(layout.model_dump())
    assert "John Doe" not in dumped
    assert "Jane Smith" not in dumped

def test_resolve_layout_without_table(db_session, sample_event_with_parties):
    layout = GuestService.resolve_layout(db_session, sample_event_with_parties["walk_in"].token)
    assert layout.guest_table_id is None
    assert len(layout.tables) == 2

def test_token_survives_updates(db_session, sample_event_with_parties):
    john = sample_event_with_parties["john"]
    token = john.token
    _, b1 = sample_event_with_parties["tables"]
    
    PartyService.reassign_party(db_session, john.id, b1.id)
    
    view = GuestService.resolve_guest(db_session, token)
    assert view.table_name == "B1"

def test_guest_qr_code(sample_event_with_parties):
    token = sample_event_with_parties["john"].token
    
    assert QRService.get_guest_url(token).endswith(f"/guest/{token}")
    png = QRService.generate_guest_qr(token)
    assert png.startswith(b"\x89PNG")
