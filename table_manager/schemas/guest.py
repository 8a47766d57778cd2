"""
Guest-facing Pydantic schemas

Only the caller's own party is ever described here; the hall layout carries
table geometry without any party identity.
"""

from datetime import date
from typing import List, Optional
from pydantic import BaseModel

from .icon import IconResponse

__all__ = ["GuestTable", "GuestSeat", "GuestView", "GuestLayout"]

class GuestTable(BaseModel):
    id: int
    table_name: str
    capacity: int
    position_x: float
    position_y: float
    
    class Config:
        from_attributes = True

class GuestSeat(BaseModel):
    seat_number: int
    member_number: Optional[int] = None

class GuestView(BaseModel):
    """What a guest sees after scanning their QR code"""
    id: int
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    group_name: Optional[str] = None
    party_size: int
    table_id: Optional[int] = None
    table_name: Optional[str] = None
    table_capacity: Optional[int] = None
    position_x: Optional[float] = None
    position_y: Optional[float] = None
    event_name: str
    event_date: date
    event_venue: Optional[str] = None
    seats: List[GuestSeat] = []

class GuestLayout(BaseModel):
    tables: List[GuestTable]
    guest_table_id: Optional[int] = None
    icons: List[IconResponse] = []
    layout_image: Optional[str] = None
