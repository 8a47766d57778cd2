"""
Layout icon model
"""

from sqlalchemy import Column, Integer, String, Float, ForeignKey

from table_manager.core.db import Base

class LayoutIcon(Base):
    __tablename__ = "layout_icons"
    
    id = Column(Integer, primary_key=True, index=True)
    event_id = Column(Integer, ForeignKey("events.id"), nullable=False, index=True)
    icon_type = Column(String(50), nullable=False)
    position_x = Column(Float, nullable=False)
    position_y = Column(Float, nullable=False)
    size = Column(Integer, default=60)
    rotation = Column(Float, default=0)
