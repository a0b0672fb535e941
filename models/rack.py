from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship
from .database import Base


class Rack(Base):
    """Racks de uma câmara, identificados pelo corredor (aisle)"""
    __tablename__ = "racks"

    id = Column(Integer, primary_key=True, index=True, autoincrement=False)
    zone_id = Column(String, ForeignKey("zones.id"), nullable=False, index=True)
    aisle = Column(String, nullable=False, index=True)  # "A", "B", "C1"
    levels = Column(Integer, nullable=False)
    positions_per_level = Column(Integer, nullable=False)

    zone = relationship("Zone", back_populates="racks")
    slots = relationship(
        "Slot",
        back_populates="rack",
        cascade="all, delete-orphan",
        order_by="Slot.id"
    )
