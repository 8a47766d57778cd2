"""
Database models package
"""

from .event import Event
from .table import Table
from .party import Party
from .seat_assignment import SeatAssignment
from .layout_icon import LayoutIcon

__all__ = ["Event", "Table", "Party", "SeatAssignment", "LayoutIcon"]
