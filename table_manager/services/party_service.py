"""
Party roster: invitees and groups of an event
"""

import logging
import secrets
from typing import List, Optional

from sqlalchemy.orm import Session

from table_manager.core.db import storage_errors, transaction
from table_manager.core.errors import NotFound, ValidationError
from table_manager.models import Party, Table
from table_manager.schemas.party import PartyCreate, PartyListItem, PartyResponse, PartyUpdate
from table_manager.services.event_service import EventService
from table_manager.services.repositories import PartyRepo, SeatRepo, TableRepo

logger = logging.getLogger(__name__)

TOKEN_BYTES = 24


def generate_token(db: Session) -> str:
    """Fresh opaque guest token (192 random bits, url-safe)"""
    token = secrets.token_urlsafe(TOKEN_BYTES)
    while PartyRepo.token_exists(db, token):
        token = secrets.token_urlsafe(TOKEN_BYTES)
    return token


def _require_name(name: Optional[str]) -> str:
    if not name or not name.strip():
        raise ValidationError("Party name is required")
    return name.strip()


def _require_size(party_size: Optional[int]) -> int:
    if party_size is None:
        return 1
    if party_size < 1:
        raise ValidationError("party_size must be at least 1")
    return party_size


def _table_for_event(db: Session, table_id: int, event_id: int) -> Table:
    table = TableRepo.get(db, table_id)
    if not table:
        raise NotFound("Table", table_id)
    if table.event_id != event_id:
        raise ValidationError(f"Table {table_id} belongs to another event")
    return table


class PartyService:
    """Service for party operations"""

    @staticmethod
    @storage_errors()
    def get_party_or_404(db: Session, party_id: int) -> Party:
        party = PartyRepo.get(db, party_id)
        if not party:
            raise NotFound("Party", party_id)
        return party

    @staticmethod
    @storage_errors()
    def add_party(db: Session, event_id: int, data: PartyCreate) -> Party:
        """Add a party; its token is generated here and never changes"""
        name = _require_name(data.name)
        party_size = _require_size(data.party_size)
        EventService.get_event_or_404(db, event_id)
        if data.table_id is not None:
            _table_for_event(db, data.table_id, event_id)

        with transaction(db):
            party = Party(
                event_id=event_id,
                table_id=data.table_id,
                name=name,
                email=data.email,
                phone=data.phone,
                group_name=data.group_name,
                party_size=party_size,
                token=generate_token(db),
            )
            db.add(party)

        db.refresh(party)
        logger.info(f"Added party {party.id} to event {event_id}")
        return party

    @staticmethod
    @storage_errors()
    def list_parties(db: Session, event_id: int) -> List[PartyListItem]:
        """Parties ordered by name, with table and seated member numbers"""
        EventService.get_event_or_404(db, event_id)
        rows = PartyRepo.list_with_table(db, event_id)
        seated = PartyRepo.seated_members(db, [party.id for party, _, _ in rows])

        return [
            PartyListItem(
                **PartyResponse.model_validate(party).model_dump(),
                table_name=table_name,
                table_capacity=table_capacity,
                seated_members=seated.get(party.id, []),
            )
            for party, table_name, table_capacity in rows
        ]

    @staticmethod
    @storage_errors()
    def update_party(db: Session, party_id: int, data: PartyUpdate) -> Party:
        """Update name, contact, group and size; the table is left alone.

        Shrinking the party releases seats held by member numbers that no
        longer exist.
        """
        name = _require_name(data.name)
        party_size = _require_size(data.party_size)
        party = PartyService.get_party_or_404(db, party_id)

        with transaction(db):
            party.name = name
            party.email = data.email
            party.phone = data.phone
            party.group_name = data.group_name
            party.party_size = party_size
            released = SeatRepo.delete_members_above(db, party_id, party_size)

        if released:
            logger.info(f"Party {party_id} shrank to {party_size}; released {released} seats")
        db.refresh(party)
        return party

    @staticmethod
    @storage_errors()
    def reassign_party(db: Session, party_id: int, table_id: Optional[int]) -> Party:
        """Set or clear the party's table.

        Seat rows held at the previous table are kept; releasing them is up to
        the caller.
        """
        party = PartyService.get_party_or_404(db, party_id)
        if table_id is not None:
            _table_for_event(db, table_id, party.event_id)

        with transaction(db):
            party.table_id = table_id

        db.refresh(party)
        return party

    @staticmethod
    @storage_errors()
    def delete_party(db: Session, party_id: int) -> None:
        """Delete a party; its seat rows stay but lose their occupant"""
        PartyService.get_party_or_404(db, party_id)
        with transaction(db):
            cleared = PartyRepo.delete_cascade(db, party_id)
        logger.info(f"Deleted party {party_id}; cleared {cleared} seats")
