"""
Seat assignment Pydantic schemas
"""

from typing import Optional
from pydantic import BaseModel

__all__ = ["SeatClaim", "SeatAssignmentResponse", "SeatListItem"]

class SeatClaim(BaseModel):
    seat_number: int
    party_id: Optional[int] = None
    member_number: Optional[int] = None

class SeatAssignmentResponse(BaseModel):
    id: int
    table_id: int
    seat_number: int
    party_id: Optional[int] = None
    member_number: Optional[int] = None
    
    class Config:
        from_attributes = True

class SeatListItem(SeatAssignmentResponse):
    party_name: Optional[str] = None
    party_size: Optional[int] = None
