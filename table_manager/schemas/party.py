"""
Party-related Pydantic schemas
"""

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, EmailStr

__all__ = ["PartyCreate", "PartyUpdate", "PartyAssign", "PartyResponse", "PartyListItem"]

class PartyCreate(BaseModel):
    """Schema for adding a party to an event"""
    name: str
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    group_name: Optional[str] = None
    party_size: int = 1
    table_id: Optional[int] = None

class PartyUpdate(BaseModel):
    """Contact and headcount fields; table assignment is separate"""
    name: str
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    group_name: Optional[str] = None
    party_size: int = 1

class PartyAssign(BaseModel):
    table_id: Optional[int] = None

class PartyResponse(BaseModel):
    id: int
    event_id: int
    table_id: Optional[int] = None
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    group_name: Optional[str] = None
    party_size: int
    token: str
    created_at: Optional[datetime] = None
    
    class Config:
        from_attributes = True

class PartyListItem(PartyResponse):
    """Party with its table and the member indices already seated"""
    table_name: Optional[str] = None
    table_capacity: Optional[int] = None
    seated_members: List[int] = []
