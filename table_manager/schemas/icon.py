"""
Layout icon Pydantic schemas
"""

from pydantic import BaseModel

__all__ = ["IconCreate", "IconPosition", "IconResponse"]

class IconCreate(BaseModel):
    icon_type: str
    position_x: float
    position_y: float
    size: int = 60
    rotation: float = 0

class IconPosition(BaseModel):
    position_x: float
    position_y: float

class IconResponse(BaseModel):
    id: int
    event_id: int
    icon_type: str
    position_x: float
    position_y: float
    size: int
    rotation: float
    
    class Config:
        from_attributes = True
