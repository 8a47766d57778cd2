"""
Guest resolution: the token-keyed, read-only view used by the guest portal
"""

import logging

from sqlalchemy.orm import Session

from table_manager.core.db import storage_errors
from table_manager.core.errors import NotFound
from table_manager.models import Party
from table_manager.schemas.guest import GuestLayout, GuestSeat, GuestTable, GuestView
from table_manager.schemas.icon import IconResponse
from table_manager.services.repositories import IconRepo, PartyRepo, SeatRepo, TableRepo

logger = logging.getLogger(__name__)

class GuestService:
    """Resolves a guest token to the caller's own assignment"""

    @staticmethod
    def _party_for_token(db: Session, token: str) -> Party:
        party = PartyRepo.get_by_token(db, token) if token else None
        if not party:
            logger.info("Unrecognised guest token")
            raise NotFound("Guest", token)
        return party

    @staticmethod
    @storage_errors()
    def resolve_guest(db: Session, token: str) -> GuestView:
        """Party, table (if assigned) and event for a token"""
        party = GuestService._party_for_token(db, token)
        table = party.table
        event = party.event

        seats = []
        if table is not None:
            seats = [
                GuestSeat(seat_number=seat.seat_number, member_number=seat.member_number)
                for seat in SeatRepo.list_for_party(db, party.id, table.id)
            ]

        return GuestView(
            id=party.id,
            name=party.name,
            email=party.email,
            phone=party.phone,
            group_name=party.group_name,
            party_size=party.party_size,
            table_id=table.id if table else None,
            table_name=table.table_name if table else None,
            table_capacity=table.capacity if table else None,
            position_x=table.position_x if table else None,
            position_y=table.position_y if table else None,
            event_name=event.name,
            event_date=event.date,
            event_venue=event.venue,
            seats=seats,
        )

    @staticmethod
    @storage_errors()
    def resolve_layout(db: Session, token: str) -> GuestLayout:
        """Every table of the guest's event plus which one is theirs"""
        party = GuestService._party_for_token(db, token)
        tables = TableRepo.list_for_event(db, party.event_id)
        icons = IconRepo.list_for_event(db, party.event_id)

        return GuestLayout(
            tables=[GuestTable.model_validate(table) for table in tables],
            guest_table_id=party.table_id,
            icons=[IconResponse.model_validate(icon) for icon in icons],
            layout_image=party.event.layout_image,
        )
