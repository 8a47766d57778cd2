"""
Event-related Pydantic schemas
"""

from datetime import date, datetime, time
from typing import Optional
from pydantic import BaseModel

__all__ = [
    "EventCreate",
    "EventUpdate",
    "EventTimesUpdate",
    "LayoutImageUpdate",
    "EventResponse",
    "EventStats",
    "EventDetail",
]

class EventCreate(BaseModel):
    """Schema for creating an event"""
    name: str
    date: date
    venue: Optional[str] = None
    start_time: Optional[time] = None
    end_time: Optional[time] = None

class EventUpdate(EventCreate):
    """Full replacement of an event's mutable fields"""

class EventTimesUpdate(BaseModel):
    start_time: Optional[time] = None
    end_time: Optional[time] = None

class LayoutImageUpdate(BaseModel):
    layout_image: Optional[str] = None

class EventResponse(BaseModel):
    """Basic event response"""
    id: int
    name: str
    date: date
    venue: Optional[str] = None
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    layout_image: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    
    class Config:
        from_attributes = True

class EventStats(BaseModel):
    """Occupancy totals for one event"""
    table_count: int
    total_capacity: int
    assigned_guests: int
    party_count: int
    remaining_seats: int

class EventDetail(EventResponse):
    """Event response with occupancy statistics"""
    stats: EventStats
