"""
Event registry: event lifecycle and the root of every cascade
"""

import logging
from datetime import date, time
from typing import List, Optional

from sqlalchemy.orm import Session

from table_manager.core.config import settings
from table_manager.core.db import storage_errors, transaction
from table_manager.core.errors import NotFound, ValidationError
from table_manager.models import Event, LayoutIcon
from table_manager.schemas.event import EventDetail, EventResponse
from table_manager.services.occupancy_service import OccupancyService
from table_manager.services.repositories import EventRepo

logger = logging.getLogger(__name__)


def _require_event_fields(name: Optional[str], event_date: Optional[date]) -> str:
    errors = []
    if not name or not name.strip():
        errors.append("name is required")
    if event_date is None:
        errors.append("date is required")
    if errors:
        raise ValidationError("Name and date are required", details=errors)
    return name.strip()


class EventService:
    """Service for event operations"""

    @staticmethod
    @storage_errors()
    def get_event_or_404(db: Session, event_id: int) -> Event:
        event = EventRepo.get(db, event_id)
        if not event:
            raise NotFound("Event", event_id)
        return event

    @staticmethod
    @storage_errors()
    def create_event(
        db: Session,
        name: Optional[str],
        event_date: Optional[date],
        venue: Optional[str] = None,
        start_time: Optional[time] = None,
        end_time: Optional[time] = None,
    ) -> Event:
        """Create an event and seed its default stage icon"""
        name = _require_event_fields(name, event_date)

        with transaction(db):
            event = Event(
                name=name,
                date=event_date,
                venue=venue,
                start_time=start_time,
                end_time=end_time,
            )
            db.add(event)
            db.flush()

            db.add(LayoutIcon(
                event_id=event.id,
                icon_type=settings.DEFAULT_ICON_TYPE,
                position_x=settings.DEFAULT_ICON_X,
                position_y=settings.DEFAULT_ICON_Y,
                size=60,
                rotation=0,
            ))

        db.refresh(event)
        logger.info(f"Created event {event.id} ({event.name})")
        return event

    @staticmethod
    @storage_errors()
    def get_event(db: Session, event_id: int) -> EventDetail:
        """Event with occupancy statistics"""
        event = EventService.get_event_or_404(db, event_id)
        stats = OccupancyService.event_stats(db, event_id)
        return EventDetail(**EventResponse.model_validate(event).model_dump(), stats=stats)

    @staticmethod
    @storage_errors()
    def list_events(db: Session) -> List[Event]:
        """All events, most recent date first"""
        return EventRepo.list_all(db)

    @staticmethod
    @storage_errors()
    def update_event(
        db: Session,
        event_id: int,
        name: Optional[str],
        event_date: Optional[date],
        venue: Optional[str] = None,
        start_time: Optional[time] = None,
        end_time: Optional[time] = None,
    ) -> Event:
        """Replace every mutable field of the event"""
        name = _require_event_fields(name, event_date)
        event = EventService.get_event_or_404(db, event_id)

        with transaction(db):
            event.name = name
            event.date = event_date
            event.venue = venue
            event.start_time = start_time
            event.end_time = end_time

        db.refresh(event)
        return event

    @staticmethod
    @storage_errors()
    def update_times(
        db: Session,
        event_id: int,
        start_time: Optional[time],
        end_time: Optional[time],
    ) -> Event:
        event = EventService.get_event_or_404(db, event_id)
        with transaction(db):
            event.start_time = start_time
            event.end_time = end_time
        db.refresh(event)
        return event

    @staticmethod
    @storage_errors()
    def set_layout_image(db: Session, event_id: int, layout_image: Optional[str]) -> Event:
        """Set or clear the venue background reference"""
        event = EventService.get_event_or_404(db, event_id)
        with transaction(db):
            event.layout_image = layout_image or None
        db.refresh(event)
        return event

    @staticmethod
    @storage_errors()
    def delete_event(db: Session, event_id: int) -> None:
        """Delete the event with its tables, parties, icons and seats"""
        EventService.get_event_or_404(db, event_id)
        with transaction(db):
            counts = EventRepo.delete_cascade(db, event_id)
        logger.info(f"Deleted event {event_id}: {counts}")
