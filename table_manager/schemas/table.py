"""
Table-related Pydantic schemas
"""

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel

__all__ = [
    "TableSpec",
    "TableUpdate",
    "TablePosition",
    "BulkTablesRequest",
    "TableResponse",
    "TableWithOccupancy",
]

class TableSpec(BaseModel):
    """One entry of a bulk table creation"""
    table_name: str
    capacity: int
    shape: Optional[str] = None
    purpose: Optional[str] = None
    color: Optional[str] = None
    seat_sides: Optional[int] = None
    seat_sides_config: Optional[str] = None
    show_seats: Optional[bool] = None

class TableUpdate(TableSpec):
    """Full replacement of a table's display attributes"""
    width: Optional[int] = None
    height: Optional[int] = None
    rotation: Optional[float] = None

class TablePosition(BaseModel):
    position_x: float
    position_y: float

class BulkTablesRequest(BaseModel):
    tables: List[TableSpec]

class TableResponse(BaseModel):
    id: int
    event_id: int
    table_name: str
    capacity: int
    position_x: float
    position_y: float
    shape: str
    purpose: str
    color: str
    width: Optional[int] = None
    height: Optional[int] = None
    rotation: float
    seat_sides: int
    seat_sides_config: Optional[str] = None
    show_seats: bool
    created_at: Optional[datetime] = None
    
    class Config:
        from_attributes = True

class TableWithOccupancy(TableResponse):
    """Table annotated with live occupancy"""
    party_count: int = 0
    seats_occupied: int = 0
