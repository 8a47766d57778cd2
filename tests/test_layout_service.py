"""
Tests for table and icon layout
"""

import pytest
from datetime import date
from sqlalchemy import create_engine, text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import sessionmaker

from table_manager.core.db import Base
from table_manager.core.errors import ConflictError, NotFound, StorageError, ValidationError
from table_manager.models import LayoutIcon, Party, SeatAssignment, Table
from table_manager.schemas.icon import IconCreate
from table_manager.schemas.party import PartyCreate
from table_manager.schemas.table import TableSpec, TableUpdate
from table_manager.services.event_service import EventService
from table_manager.services.layout_service import LayoutService, grid_position
from table_manager.services.party_service import PartyService
from table_manager.services.repositories import TableRepo
from table_manager.services.seating_service import SeatingService

# Test database setup
SQLALCHEMY_DATABASE_URL = "sqlite:///./test_layout.db"
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
def event(db_session):
    return EventService.create_event(db_session, "Spring Gala", date(2026, 5, 1))

def test_grid_position():
    assert grid_position(0) == (100, 100)
    assert grid_position(1) == (250, 100)
    assert grid_position(4) == (700, 100)
    assert grid_position(5) == (100, 250)
    assert grid_position(12) == (400, 400)

def test_bulk_create_lays_out_grid(db_session, event):
    specs = [TableSpec(table_name=f"T{i:02d}", capacity=8) for i in range(7)]
    
    tables = LayoutService.bulk_create_tables(db_session, event.id, specs)
    
    assert len(tables) == 7
    assert [(t.position_x, t.position_y) for t in tables[:2]] == [(100, 100), (250, 100)]
    assert (tables[5].position_x, tables[5].position_y) == (100, 250)
    assert (tables[6].position_x, tables[6].position_y) == (250, 250)

def test_bulk_create_applies_defaults(db_session, event):
    table = LayoutService.bulk_create_tables(db_session, event.id, [
        TableSpec(table_name="A1", capacity=8),
    ])[0]
    
    assert table.shape == "circle"
    assert table.purpose == "dining table"
    assert table.color == "#ffffff"
    assert table.seat_sides == 2
    assert table.show_seats is True
    assert table.rotation == 0

def test_bulk_create_keeps_display_options(db_session, event):
    table = LayoutService.bulk_create_tables(db_session, event.id, [
        TableSpec(table_name="Head", capacity=12, shape="rectangle", purpose="head table",
                  color="#ffd700", seat_sides=1, seat_sides_config='{"top": 12}', show_seats=False),
    ])[0]
    
    assert table.shape == "rectangle"
    assert table.seat_sides == 1
    assert table.seat_sides_config == '{"top": 12}'
    assert table.show_seats is False

def test_bulk_create_empty_batch(db_session, event):
    with pytest.raises(ValidationError):
        LayoutService.bulk_create_tables(db_session, event.id, [])

def test_bulk_create_missing_event(db_session):
    with pytest.raises(NotFound):
        LayoutService.bulk_create_tables(db_session, 404, [TableSpec(table_name="A1", capacity=8)])

def test_same_batch_duplicate_creates_nothing(db_session, event):
    specs = [
        TableSpec(table_name="A1", capacity=8),
        TableSpec(table_name="A2", capacity=8),
        TableSpec(table_name="A1", capacity=6),
    ]
    
    with pytest.raises(ConflictError):
        LayoutService.bulk_create_tables(db_session, event.id, specs)
    
    assert db_session.query(Table).filter(Table.event_id == event.id).count() == 0

def test_cross_batch_duplicate_rejected(db_session, event):
    LayoutService.bulk_create_tables(db_session, event.id, [TableSpec(table_name="A1", capacity=8)])
    
    with pytest.raises(ConflictError):
        LayoutService.bulk_create_tables(db_session, event.id, [
            TableSpec(table_name="B1", capacity=8),
            TableSpec(table_name="A1", capacity=8),
        ])
    
    names = [t.table_name for t in db_session.query(Table).filter(Table.event_id == event.id).all()]
    assert names == ["A1"]

def test_database_duplicate_rolls_back_whole_batch(db_session, event, monkeypatch):
    LayoutService.bulk_create_tables(db_session, event.id, [TableSpec(table_name="A1", capacity=8)])
    # Skip the name pre-check so the unique constraint has to catch it
    monkeypatch.setattr(TableRepo, "existing_names", staticmethod(lambda db, event_id, names: []))
    
    with pytest.raises(ConflictError) as exc_info:
        LayoutService.bulk_create_tables(db_session, event.id, [
            TableSpec(table_name="B1", capacity=8),
            TableSpec(table_name="A1", capacity=8),
        ])
    
    assert isinstance(exc_info.value.__cause__, IntegrityError)
    names = [t.table_name for t in db_session.query(Table).filter(Table.event_id == event.id).all()]
    assert names == ["A1"]

def test_list_tables_storage_failure(db_session, event):
    db_session.execute(text("DROP TABLE tables"))
    db_session.commit()
    
    with pytest.raises(StorageError):
        LayoutService.list_tables(db_session, event.id)
    with pytest.raises(StorageError):
        LayoutService.get_table_or_404(db_session, 1)

def test_invalid_capacity_aborts_batch(db_session, event):
    with pytest.raises(ValidationError):
        LayoutService.bulk_create_tables(db_session, event.id, [
            TableSpec(table_name="A1", capacity=8),
            TableSpec(table_name="A2", capacity=0),
        ])
    
    assert db_session.query(Table).count() == 0

def test_same_name_allowed_in_other_event(db_session, event):
    other = EventService.create_event(db_session, "Other", date(2026, 6, 1))
    LayoutService.bulk_create_tables(db_session, event.id, [TableSpec(table_name="A1", capacity=8)])
    LayoutService.bulk_create_tables(db_session, other.id, [TableSpec(table_name="A1", capacity=8)])
    
    assert db_session.query(Table).filter(Table.table_name == "A1").count() == 2

def test_list_tables_with_occupancy(db_session, event):
    b, a = LayoutService.bulk_create_tables(db_session, event.id, [
        TableSpec(table_name="B", capacity=10),
        TableSpec(table_name="A", capacity=8),
    ])
    PartyService.add_party(db_session, event.id, PartyCreate(name="Lee", party_size=4, table_id=a.id))
    PartyService.add_party(db_session, event.id, PartyCreate(name="Kim", party_size=2, table_id=a.id))
    PartyService.add_party(db_session, event.id, PartyCreate(name="Solo"))
    
    tables = LayoutService.list_tables(db_session, event.id)
    
    assert [t.table_name for t in tables] == ["A", "B"]
    assert tables[0].party_count == 2
    assert tables[0].seats_occupied == 6
    assert tables[1].party_count == 0
    assert tables[1].seats_occupied == 0

def test_update_table(db_session, event):
    table = LayoutService.bulk_create_tables(db_session, event.id, [TableSpec(table_name="A1", capacity=8)])[0]
    
    updated = LayoutService.update_table(db_session, table.id, TableUpdate(
        table_name="VIP", capacity=10, shape="square", width=120, height=80, rotation=45
    ))
    
    assert updated.table_name == "VIP"
    assert updated.capacity == 10
    assert updated.shape == "square"
    assert (updated.width, updated.height, updated.rotation) == (120, 80, 45)
    assert (updated.position_x, updated.position_y) == (100, 100)

def test_update_table_name_conflict(db_session, event):
    a1, a2 = LayoutService.bulk_create_tables(db_session, event.id, [
        TableSpec(table_name="A1", capacity=8),
        TableSpec(table_name="A2", capacity=8),
    ])
    
    with pytest.raises(ConflictError):
        LayoutService.update_table(db_session, a2.id, TableUpdate(table_name="A1", capacity=8))
    
    db_session.expire_all()
    assert LayoutService.get_table_or_404(db_session, a2.id).table_name == "A2"

def test_update_missing_table(db_session):
    with pytest.raises(NotFound):
        LayoutService.update_table(db_session, 1, TableUpdate(table_name="A1", capacity=8))

def test_reposition_last_write_wins(db_session, event):
    table = LayoutService.bulk_create_tables(db_session, event.id, [TableSpec(table_name="A1", capacity=8)])[0]
    
    LayoutService.reposition_table(db_session, table.id, 320.5, 180.25)
    LayoutService.reposition_table(db_session, table.id, 50, 60)
    LayoutService.reposition_table(db_session, table.id, 50, 60)
    
    db_session.expire_all()
    moved = LayoutService.get_table_or_404(db_session, table.id)
    assert (moved.position_x, moved.position_y) == (50, 60)

def test_delete_table_cascade(db_session, event):
    a1, a2 = LayoutService.bulk_create_tables(db_session, event.id, [
        TableSpec(table_name="A1", capacity=8),
        TableSpec(table_name="A2", capacity=8),
    ])
    lee = PartyService.add_party(db_session, event.id, PartyCreate(name="Lee", party_size=2, table_id=a1.id))
    kim = PartyService.add_party(db_session, event.id, PartyCreate(name="Kim", party_size=1, table_id=a2.id))
    SeatingService.claim_seat(db_session, a1.id, 1, lee.id, 1)
    SeatingService.claim_seat(db_session, a1.id, 2, lee.id, 2)
    SeatingService.claim_seat(db_session, a2.id, 1, kim.id, 1)
    
    LayoutService.delete_table(db_session, a1.id)
    
    assert db_session.query(Table).filter(Table.id == a1.id).count() == 0
    assert PartyService.get_party_or_404(db_session, lee.id).table_id is None
    assert db_session.query(SeatAssignment).filter(SeatAssignment.table_id == a1.id).count() == 0
    # Untouched table keeps its party and seat
    assert PartyService.get_party_or_404(db_session, kim.id).table_id == a2.id
    assert db_session.query(SeatAssignment).filter(SeatAssignment.table_id == a2.id).count() == 1

def test_delete_missing_table(db_session):
    with pytest.raises(NotFound):
        LayoutService.delete_table(db_session, 3)

def test_clear_layout(db_session, event):
    a1 = LayoutService.bulk_create_tables(db_session, event.id, [TableSpec(table_name="A1", capacity=8)])[0]
    LayoutService.add_icon(db_session, event.id, IconCreate(icon_type="bar", position_x=10, position_y=10))
    lee = PartyService.add_party(db_session, event.id, PartyCreate(name="Lee", party_size=2, table_id=a1.id))
    SeatingService.claim_seat(db_session, a1.id, 1, lee.id, 1)
    
    LayoutService.clear_layout(db_session, event.id)
    
    assert db_session.query(Table).filter(Table.event_id == event.id).count() == 0
    assert db_session.query(LayoutIcon).filter(LayoutIcon.event_id == event.id).count() == 0
    assert db_session.query(SeatAssignment).count() == 0
    # Parties survive, unassigned
    party = db_session.query(Party).filter(Party.id == lee.id).one()
    assert party.table_id is None

def test_icons(db_session, event):
    icon = LayoutService.add_icon(db_session, event.id, IconCreate(icon_type="dance floor", position_x=200, position_y=300))
    
    assert icon.size == 60
    assert icon.rotation == 0
    
    icons = LayoutService.list_icons(db_session, event.id)
    assert [i.icon_type for i in icons] == ["stage", "dance floor"]
    
    LayoutService.reposition_icon(db_session, icon.id, 250, 320)
    db_session.expire_all()
    assert (LayoutService.get_icon_or_404(db_session, icon.id).position_x,
            LayoutService.get_icon_or_404(db_session, icon.id).position_y) == (250, 320)
    
    LayoutService.delete_icon(db_session, icon.id)
    assert [i.icon_type for i in LayoutService.list_icons(db_session, event.id)] == ["stage"]

def test_icon_errors(db_session, event):
    with pytest.raises(ValidationError):
        LayoutService.add_icon(db_session, event.id, IconCreate(icon_type=" ", position_x=0, position_y=0))
    with pytest.raises(NotFound):
        LayoutService.add_icon(db_session, 999, IconCreate(icon_type="bar", position_x=0, position_y=0))
    with pytest.raises(NotFound):
        LayoutService.reposition_icon(db_session, 999, 1, 1)
    with pytest.raises(NotFound):
        LayoutService.delete_icon(db_session, 999)
