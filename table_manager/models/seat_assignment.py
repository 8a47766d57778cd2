"""
Seat assignment model
"""

from sqlalchemy import Column, Integer, ForeignKey, UniqueConstraint

from table_manager.core.db import Base

class SeatAssignment(Base):
    __tablename__ = "seat_assignments"
    
    id = Column(Integer, primary_key=True, index=True)
    table_id = Column(Integer, ForeignKey("tables.id"), nullable=False, index=True)
    seat_number = Column(Integer, nullable=False)
    party_id = Column(Integer, ForeignKey("parties.id"), nullable=True, index=True)
    member_number = Column(Integer, nullable=True)
    
    __table_args__ = (
        UniqueConstraint("table_id", "seat_number", name="uq_seat_assignments_table_seat"),
    )
