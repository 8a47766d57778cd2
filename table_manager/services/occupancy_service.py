"""
Read-only occupancy statistics derived from tables, parties and seats
"""

from typing import List

from sqlalchemy.orm import Session

from table_manager.core.db import storage_errors
from table_manager.schemas.event import EventStats
from table_manager.schemas.table import TableResponse, TableWithOccupancy
from table_manager.services.repositories import EventRepo, TableRepo


class OccupancyService:
    """Aggregates counts per event and per table"""

    @staticmethod
    @storage_errors()
    def event_stats(db: Session, event_id: int) -> EventStats:
        """Totals for an event.

        ``assigned_guests`` counts the headcount of parties that have a table.
        Capacity is not enforced, so ``remaining_seats`` goes negative when a
        hall is overbooked.
        """
        table_count, total_capacity, assigned_guests, party_count = EventRepo.stats(db, event_id)
        return EventStats(
            table_count=table_count,
            total_capacity=total_capacity,
            assigned_guests=assigned_guests,
            party_count=party_count,
            remaining_seats=total_capacity - assigned_guests,
        )

    @staticmethod
    @storage_errors()
    def tables_with_occupancy(db: Session, event_id: int) -> List[TableWithOccupancy]:
        """Every table of the event with its party count and seats occupied"""
        results = []
        for table, party_count, seats_occupied in TableRepo.list_with_occupancy(db, event_id):
            base = TableResponse.model_validate(table)
            results.append(TableWithOccupancy(
                **base.model_dump(),
                party_count=int(party_count),
                seats_occupied=int(seats_occupied),
            ))
        return results
