"""
Table model
"""

from datetime import datetime
from sqlalchemy import Column, Integer, String, Float, Boolean, DateTime, Text, ForeignKey, UniqueConstraint

from table_manager.core.db import Base

class Table(Base):
    __tablename__ = "tables"
    
    id = Column(Integer, primary_key=True, index=True)
    event_id = Column(Integer, ForeignKey("events.id"), nullable=False, index=True)
    table_name = Column(String(100), nullable=False)
    capacity = Column(Integer, nullable=False)
    position_x = Column(Float, default=0)
    position_y = Column(Float, default=0)
    shape = Column(String(50), default="circle")
    purpose = Column(String(100), default="dining table")
    color = Column(String(20), default="#ffffff")
    width = Column(Integer, nullable=True)
    height = Column(Integer, nullable=True)
    rotation = Column(Float, default=0)
    seat_sides = Column(Integer, default=2)
    seat_sides_config = Column(Text, nullable=True)
    show_seats = Column(Boolean, default=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    
    __table_args__ = (
        UniqueConstraint("event_id", "table_name", name="uq_tables_event_name"),
    )
