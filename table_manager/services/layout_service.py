"""
Layout store: tables and decorative icons positioned on the venue canvas
"""

import logging
from collections import Counter
from typing import List, Tuple

from sqlalchemy.orm import Session

from table_manager.core.db import storage_errors, transaction
from table_manager.core.errors import ConflictError, NotFound, ValidationError
from table_manager.models import LayoutIcon, Table
from table_manager.schemas.icon import IconCreate
from table_manager.schemas.table import TableSpec, TableUpdate, TableWithOccupancy
from table_manager.services.event_service import EventService
from table_manager.services.occupancy_service import OccupancyService
from table_manager.services.repositories import IconRepo, TableRepo

logger = logging.getLogger(__name__)

GRID_COLUMNS = 5
GRID_ORIGIN = 100
GRID_SPACING = 150

DEFAULT_SHAPE = "circle"
DEFAULT_PURPOSE = "dining table"
DEFAULT_COLOR = "#ffffff"
DEFAULT_SEAT_SIDES = 2


def grid_position(index: int) -> Tuple[float, float]:
    """Canvas position of the index-th table of a batch"""
    row, col = divmod(index, GRID_COLUMNS)
    return float(GRID_ORIGIN + col * GRID_SPACING), float(GRID_ORIGIN + row * GRID_SPACING)


def _validate_spec(spec: TableSpec, position: int) -> str:
    name = (spec.table_name or "").strip()
    if not name:
        raise ValidationError(f"Table #{position}: table_name is required")
    if spec.capacity is None or spec.capacity < 1:
        raise ValidationError(f"Table '{name}': capacity must be at least 1")
    return name


def _apply_display(table: Table, spec: TableSpec) -> None:
    table.shape = spec.shape or DEFAULT_SHAPE
    table.purpose = spec.purpose or DEFAULT_PURPOSE
    table.color = spec.color or DEFAULT_COLOR
    table.seat_sides = spec.seat_sides if spec.seat_sides is not None else DEFAULT_SEAT_SIDES
    table.seat_sides_config = spec.seat_sides_config or None
    table.show_seats = spec.show_seats if spec.show_seats is not None else True


class LayoutService:
    """Service for table and icon placement"""

    # -------- tables --------

    @staticmethod
    @storage_errors()
    def get_table_or_404(db: Session, table_id: int) -> Table:
        table = TableRepo.get(db, table_id)
        if not table:
            raise NotFound("Table", table_id)
        return table

    @staticmethod
    @storage_errors()
    def bulk_create_tables(db: Session, event_id: int, specs: List[TableSpec]) -> List[Table]:
        """Create a batch of tables laid out on a 5-column grid.

        The batch is all-or-nothing: a bad spec or a name already taken in the
        event aborts it before anything becomes visible.
        """
        if not specs:
            raise ValidationError("Tables array is required")
        EventService.get_event_or_404(db, event_id)

        names = [_validate_spec(spec, i + 1) for i, spec in enumerate(specs)]
        repeated = sorted(name for name, count in Counter(names).items() if count > 1)
        if repeated:
            raise ConflictError(f"Duplicate table names in batch: {', '.join(repeated)}", details=repeated)
        taken = TableRepo.existing_names(db, event_id, names)
        if taken:
            raise ConflictError(f"Table names already exist: {', '.join(sorted(taken))}", details=sorted(taken))

        created = []
        with transaction(db):
            for index, (name, spec) in enumerate(zip(names, specs)):
                x, y = grid_position(index)
                table = Table(
                    event_id=event_id,
                    table_name=name,
                    capacity=spec.capacity,
                    position_x=x,
                    position_y=y,
                    rotation=0,
                )
                _apply_display(table, spec)
                db.add(table)
                created.append(table)
            db.flush()

        for table in created:
            db.refresh(table)
        logger.info(f"Created {len(created)} tables for event {event_id}")
        return created

    @staticmethod
    @storage_errors()
    def list_tables(db: Session, event_id: int) -> List[TableWithOccupancy]:
        """Tables ordered by name, each with live occupancy"""
        EventService.get_event_or_404(db, event_id)
        return OccupancyService.tables_with_occupancy(db, event_id)

    @staticmethod
    @storage_errors()
    def update_table(db: Session, table_id: int, data: TableUpdate) -> Table:
        """Replace the table's name, capacity and display attributes"""
        table = LayoutService.get_table_or_404(db, table_id)
        name = _validate_spec(data, 1)

        if name != table.table_name and TableRepo.existing_names(db, table.event_id, [name]):
            raise ConflictError(f"Table name already exists: {name}", details=[name])

        with transaction(db):
            table.table_name = name
            table.capacity = data.capacity
            _apply_display(table, data)
            table.width = data.width or None
            table.height = data.height or None
            table.rotation = data.rotation if data.rotation is not None else 0

        db.refresh(table)
        return table

    @staticmethod
    @storage_errors()
    def reposition_table(db: Session, table_id: int, x: float, y: float) -> Table:
        """Move a table; last write wins"""
        table = LayoutService.get_table_or_404(db, table_id)
        with transaction(db):
            table.position_x = x
            table.position_y = y
        return table

    @staticmethod
    @storage_errors()
    def delete_table(db: Session, table_id: int) -> None:
        """Delete a table, unassigning its parties and dropping its seats"""
        LayoutService.get_table_or_404(db, table_id)
        with transaction(db):
            counts = TableRepo.delete_cascade(db, table_id)
        logger.info(f"Deleted table {table_id}: {counts}")

    @staticmethod
    @storage_errors()
    def clear_layout(db: Session, event_id: int) -> None:
        """Remove every icon, then every table, of an event"""
        EventService.get_event_or_404(db, event_id)
        with transaction(db):
            icons = IconRepo.delete_for_event(db, event_id)
            counts = TableRepo.delete_for_event(db, event_id)
        logger.info(f"Cleared layout of event {event_id}: {icons} icons, {counts}")

    # -------- icons --------

    @staticmethod
    @storage_errors()
    def get_icon_or_404(db: Session, icon_id: int) -> LayoutIcon:
        icon = IconRepo.get(db, icon_id)
        if not icon:
            raise NotFound("Icon", icon_id)
        return icon

    @staticmethod
    @storage_errors()
    def add_icon(db: Session, event_id: int, data: IconCreate) -> LayoutIcon:
        if not data.icon_type or not data.icon_type.strip():
            raise ValidationError("icon_type is required")
        EventService.get_event_or_404(db, event_id)

        with transaction(db):
            icon = LayoutIcon(
                event_id=event_id,
                icon_type=data.icon_type.strip(),
                position_x=data.position_x,
                position_y=data.position_y,
                size=data.size or 60,
                rotation=data.rotation or 0,
            )
            db.add(icon)
        db.refresh(icon)
        return icon

    @staticmethod
    @storage_errors()
    def list_icons(db: Session, event_id: int) -> List[LayoutIcon]:
        EventService.get_event_or_404(db, event_id)
        return IconRepo.list_for_event(db, event_id)

    @staticmethod
    @storage_errors()
    def reposition_icon(db: Session, icon_id: int, x: float, y: float) -> LayoutIcon:
        icon = LayoutService.get_icon_or_404(db, icon_id)
        with transaction(db):
            icon.position_x = x
            icon.position_y = y
        return icon

    @staticmethod
    @storage_errors()
    def delete_icon(db: Session, icon_id: int) -> None:
        icon = LayoutService.get_icon_or_404(db, icon_id)
        with transaction(db):
            db.delete(icon)
