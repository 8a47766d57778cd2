"""
Pydantic schemas package
"""

from .common import *
from .event import *
from .table import *
from .party import *
from .seat import *
from .icon import *
from .guest import *

__all__ = [
    "StandardResponse",
    "ErrorResponse",
    "EventCreate",
    "EventUpdate",
    "EventTimesUpdate",
    "LayoutImageUpdate",
    "EventResponse",
    "EventStats",
    "EventDetail",
    "TableSpec",
    "TableUpdate",
    "TablePosition",
    "BulkTablesRequest",
    "TableResponse",
    "TableWithOccupancy",
    "PartyCreate",
    "PartyUpdate",
    "PartyAssign",
    "PartyResponse",
    "PartyListItem",
    "SeatClaim",
    "SeatAssignmentResponse",
    "SeatListItem",
    "IconCreate",
    "IconPosition",
    "IconResponse",
    "GuestTable",
    "GuestSeat",
    "GuestView",
    "GuestLayout",
]
