"""
Seat assignment ledger: which party member sits in which seat
"""

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from table_manager.core.db import storage_errors, transaction
from table_manager.core.errors import ValidationError
from table_manager.models import SeatAssignment
from table_manager.schemas.seat import SeatAssignmentResponse, SeatListItem
from table_manager.services.layout_service import LayoutService
from table_manager.services.party_service import PartyService
from table_manager.services.repositories import SeatRepo

logger = logging.getLogger(__name__)

class SeatingService:
    """Service for per-seat occupancy"""

    @staticmethod
    @storage_errors()
    def claim_seat(
        db: Session,
        table_id: int,
        seat_number: int,
        party_id: Optional[int],
        member_number: Optional[int] = None,
    ) -> SeatAssignment:
        """Put a party member in a seat, replacing whoever held it.

        A seat has at most one occupant and a member holds at most one seat:
        the member's previous seat, if any, is released. ``member_number``
        defaults to 1 when a party is given. Without a party the seat is
        stored as an unbound reservation with no member number, and passing a
        member number anyway is a ValidationError.
        """
        table = LayoutService.get_table_or_404(db, table_id)
        if seat_number is None or seat_number < 1:
            raise ValidationError("seat_number must be at least 1")

        if party_id is not None:
            party = PartyService.get_party_or_404(db, party_id)
            if party.event_id != table.event_id:
                raise ValidationError(f"Party {party_id} belongs to another event")
            if member_number is None:
                member_number = 1
            if not 1 <= member_number <= party.party_size:
                raise ValidationError(
                    f"member_number must be between 1 and {party.party_size}",
                    details={"party_id": party_id, "member_number": member_number},
                )
        elif member_number is not None:
            raise ValidationError(
                "member_number requires a party",
                details={"member_number": member_number},
            )

        with transaction(db):
            occupant = SeatRepo.occupant(db, table_id, seat_number)
            if occupant is not None and occupant.party_id is not None:
                logger.info(
                    f"Seat {seat_number} at table {table_id}: replacing party "
                    f"{occupant.party_id}/{occupant.member_number}"
                )
            SeatRepo.delete(db, table_id, seat_number)
            if party_id is not None:
                SeatRepo.delete_member(db, party_id, member_number)

            assignment = SeatAssignment(
                table_id=table_id,
                seat_number=seat_number,
                party_id=party_id,
                member_number=member_number,
            )
            db.add(assignment)

        db.refresh(assignment)
        return assignment

    @staticmethod
    @storage_errors()
    def list_seats(db: Session, table_id: int) -> List[SeatListItem]:
        """Seat rows of a table ordered by seat number, with occupant name and size"""
        LayoutService.get_table_or_404(db, table_id)
        return [
            SeatListItem(
                **SeatAssignmentResponse.model_validate(assignment).model_dump(),
                party_name=party_name,
                party_size=party_size,
            )
            for assignment, party_name, party_size in SeatRepo.list_for_table(db, table_id)
        ]

    @staticmethod
    @storage_errors()
    def release_seat(db: Session, table_id: int, seat_number: int) -> bool:
        """Remove the seat row if present; returns whether one was removed"""
        with transaction(db):
            removed = SeatRepo.delete(db, table_id, seat_number)
        return removed > 0
