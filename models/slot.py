from sqlalchemy import Column, Integer, Boolean, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from .database import Base
import enum


class SlotStatus(str, enum.Enum):
    EMPTY = "EMPTY"
    OCCUPIED = "OCCUPIED"
    BLOCKED = "BLOCKED"


class Slot(Base):
    """Posição (nível, posição) dentro de um rack

    A ocupação não é guardada aqui: é derivada dos itens de inventário.
    """
    __tablename__ = "slots"

    id = Column(Integer, primary_key=True, index=True)
    rack_id = Column(Integer, ForeignKey("racks.id"), nullable=False, index=True)
    level = Column(Integer, nullable=False)  # 1..levels
    position = Column(Integer, nullable=False)  # 1..positions_per_level
    blocked = Column(Boolean, default=False, nullable=False)

    rack = relationship("Rack", back_populates="slots")

    __table_args__ = (
        UniqueConstraint("rack_id", "level", "position", name="uq_rack_level_position"),
    )
