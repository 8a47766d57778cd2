"""
Repository layer abstracting storage.

Cascades are spelled out here as ordered bulk statements instead of being
declared on the schema, so every delete performs its dependent cleanup
explicitly. Callers wrap each call in ``transaction`` so the cleanup and the
primary delete commit or roll back together. Bulk statements use the
"fetch" synchronization so affected objects already in the session are
updated or evicted along with their rows.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from table_manager.models import Event, LayoutIcon, Party, SeatAssignment, Table


# -------- Event repository --------

class EventRepo:
    @staticmethod
    def get(db: Session, event_id: int) -> Optional[Event]:
        return db.query(Event).filter(Event.id == event_id).first()

    @staticmethod
    def list_all(db: Session) -> List[Event]:
        return db.query(Event).order_by(Event.date.desc(), Event.id.desc()).all()

    @staticmethod
    def delete_cascade(db: Session, event_id: int) -> Dict[str, int]:
        """Delete an event and everything that hangs off it"""
        table_ids = select(Table.id).where(Table.event_id == event_id)
        party_ids = select(Party.id).where(Party.event_id == event_id)

        counts = {}
        counts["seats"] = db.query(SeatAssignment).filter(
            SeatAssignment.table_id.in_(table_ids)
        ).delete(synchronize_session="fetch")
        # Seats at another event's table that point at one of our parties
        db.query(SeatAssignment).filter(
            SeatAssignment.party_id.in_(party_ids)
        ).update({SeatAssignment.party_id: None}, synchronize_session="fetch")
        counts["parties"] = db.query(Party).filter(Party.event_id == event_id).delete(synchronize_session="fetch")
        counts["icons"] = db.query(LayoutIcon).filter(LayoutIcon.event_id == event_id).delete(synchronize_session="fetch")
        counts["tables"] = db.query(Table).filter(Table.event_id == event_id).delete(synchronize_session="fetch")
        db.query(Event).filter(Event.id == event_id).delete(synchronize_session="fetch")
        return counts

    @staticmethod
    def stats(db: Session, event_id: int) -> Tuple[int, int, int, int]:
        """(table_count, total_capacity, assigned_guests, party_count)"""
        table_count, total_capacity = db.query(
            func.count(Table.id),
            func.coalesce(func.sum(Table.capacity), 0),
        ).filter(Table.event_id == event_id).one()

        party_count = db.query(func.count(Party.id)).filter(Party.event_id == event_id).scalar()
        assigned_guests = db.query(func.coalesce(func.sum(Party.party_size), 0)).filter(
            Party.event_id == event_id,
            Party.table_id.isnot(None),
        ).scalar()
        return int(table_count), int(total_capacity), int(assigned_guests), int(party_count)


# -------- Table repository --------

class TableRepo:
    @staticmethod
    def get(db: Session, table_id: int) -> Optional[Table]:
        return db.query(Table).filter(Table.id == table_id).first()

    @staticmethod
    def existing_names(db: Session, event_id: int, names: List[str]) -> List[str]:
        rows = db.query(Table.table_name).filter(
            Table.event_id == event_id,
            Table.table_name.in_(names),
        ).all()
        return [row.table_name for row in rows]

    @staticmethod
    def list_with_occupancy(db: Session, event_id: int) -> List[Tuple[Table, int, int]]:
        """Each table with its party count and the sum of their party sizes"""
        return db.query(
            Table,
            func.count(Party.id),
            func.coalesce(func.sum(Party.party_size), 0),
        ).outerjoin(
            Party, Party.table_id == Table.id
        ).filter(
            Table.event_id == event_id
        ).group_by(Table.id).order_by(Table.table_name).all()

    @staticmethod
    def list_for_event(db: Session, event_id: int) -> List[Table]:
        return db.query(Table).filter(Table.event_id == event_id).order_by(Table.table_name).all()

    @staticmethod
    def delete_cascade(db: Session, table_id: int) -> Dict[str, int]:
        """Unassign parties, drop the table's seats, then the table"""
        counts = {}
        counts["parties_unassigned"] = db.query(Party).filter(
            Party.table_id == table_id
        ).update({Party.table_id: None}, synchronize_session="fetch")
        counts["seats"] = db.query(SeatAssignment).filter(
            SeatAssignment.table_id == table_id
        ).delete(synchronize_session="fetch")
        db.query(Table).filter(Table.id == table_id).delete(synchronize_session="fetch")
        return counts

    @staticmethod
    def delete_for_event(db: Session, event_id: int) -> Dict[str, int]:
        """Same cascade as delete_cascade, for every table of an event at once"""
        table_ids = select(Table.id).where(Table.event_id == event_id)
        counts = {}
        counts["parties_unassigned"] = db.query(Party).filter(
            Party.table_id.in_(table_ids)
        ).update({Party.table_id: None}, synchronize_session="fetch")
        counts["seats"] = db.query(SeatAssignment).filter(
            SeatAssignment.table_id.in_(table_ids)
        ).delete(synchronize_session="fetch")
        counts["tables"] = db.query(Table).filter(Table.event_id == event_id).delete(synchronize_session="fetch")
        return counts


# -------- Party repository --------

class PartyRepo:
    @staticmethod
    def get(db: Session, party_id: int) -> Optional[Party]:
        return db.query(Party).filter(Party.id == party_id).first()

    @staticmethod
    def get_by_token(db: Session, token: str) -> Optional[Party]:
        return db.query(Party).filter(Party.token == token).first()

    @staticmethod
    def token_exists(db: Session, token: str) -> bool:
        return db.query(Party.id).filter(Party.token == token).first() is not None

    @staticmethod
    def list_with_table(db: Session, event_id: int) -> List[Tuple[Party, Optional[str], Optional[int]]]:
        return db.query(
            Party,
            Table.table_name,
            Table.capacity,
        ).outerjoin(
            Table, Party.table_id == Table.id
        ).filter(
            Party.event_id == event_id
        ).order_by(Party.name, Party.id).all()

    @staticmethod
    def seated_members(db: Session, party_ids: List[int]) -> Dict[int, List[int]]:
        """party id -> ordered member numbers currently holding a seat"""
        if not party_ids:
            return {}
        rows = db.query(SeatAssignment.party_id, SeatAssignment.member_number).filter(
            SeatAssignment.party_id.in_(party_ids),
            SeatAssignment.member_number.isnot(None),
        ).order_by(SeatAssignment.party_id, SeatAssignment.member_number).all()

        result: Dict[int, List[int]] = {}
        for party_id, member_number in rows:
            result.setdefault(party_id, []).append(member_number)
        return result

    @staticmethod
    def delete_cascade(db: Session, party_id: int) -> int:
        """Clear the party from its seats (rows stay) and delete it"""
        cleared = db.query(SeatAssignment).filter(
            SeatAssignment.party_id == party_id
        ).update({SeatAssignment.party_id: None}, synchronize_session="fetch")
        db.query(Party).filter(Party.id == party_id).delete(synchronize_session="fetch")
        return cleared


# -------- Seat assignment repository --------

class SeatRepo:
    @staticmethod
    def occupant(db: Session, table_id: int, seat_number: int):
        """(party_id, member_number) row of the seat, or None when it is free"""
        return db.query(SeatAssignment.party_id, SeatAssignment.member_number).filter(
            SeatAssignment.table_id == table_id,
            SeatAssignment.seat_number == seat_number,
        ).first()

    @staticmethod
    def list_for_table(db: Session, table_id: int) -> List[Tuple[SeatAssignment, Optional[str], Optional[int]]]:
        return db.query(
            SeatAssignment,
            Party.name,
            Party.party_size,
        ).outerjoin(
            Party, SeatAssignment.party_id == Party.id
        ).filter(
            SeatAssignment.table_id == table_id
        ).order_by(SeatAssignment.seat_number).all()

    @staticmethod
    def list_for_party(db: Session, party_id: int, table_id: Optional[int] = None) -> List[SeatAssignment]:
        query = db.query(SeatAssignment).filter(SeatAssignment.party_id == party_id)
        if table_id is not None:
            query = query.filter(SeatAssignment.table_id == table_id)
        return query.order_by(SeatAssignment.seat_number).all()

    @staticmethod
    def delete(db: Session, table_id: int, seat_number: int) -> int:
        return db.query(SeatAssignment).filter(
            SeatAssignment.table_id == table_id,
            SeatAssignment.seat_number == seat_number,
        ).delete(synchronize_session="fetch")

    @staticmethod
    def delete_member(db: Session, party_id: int, member_number: int) -> int:
        return db.query(SeatAssignment).filter(
            SeatAssignment.party_id == party_id,
            SeatAssignment.member_number == member_number,
        ).delete(synchronize_session="fetch")

    @staticmethod
    def delete_members_above(db: Session, party_id: int, party_size: int) -> int:
        return db.query(SeatAssignment).filter(
            SeatAssignment.party_id == party_id,
            SeatAssignment.member_number > party_size,
        ).delete(synchronize_session="fetch")


# -------- Layout icon repository --------

class IconRepo:
    @staticmethod
    def get(db: Session, icon_id: int) -> Optional[LayoutIcon]:
        return db.query(LayoutIcon).filter(LayoutIcon.id == icon_id).first()

    @staticmethod
    def list_for_event(db: Session, event_id: int) -> List[LayoutIcon]:
        return db.query(LayoutIcon).filter(LayoutIcon.event_id == event_id).order_by(LayoutIcon.id).all()

    @staticmethod
    def delete_for_event(db: Session, event_id: int) -> int:
        return db.query(LayoutIcon).filter(LayoutIcon.event_id == event_id).delete(synchronize_session="fetch")
