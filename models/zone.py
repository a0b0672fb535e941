from sqlalchemy import Column, Integer, String, Enum as SQLEnum
from sqlalchemy.orm import relationship
from .database import Base
import enum


class ZoneCategory(str, enum.Enum):
    DRY = "DRY"
    COLD = "COLD"
    FROZEN = "FROZEN"


class Zone(Base):
    """Câmaras do armazém (seca, refrigerada, congelada)"""
    __tablename__ = "zones"

    id = Column(String, primary_key=True, index=True)  # "zone-1"
    name = Column(String, nullable=False)  # "Cámara Seca A"
    category = Column(SQLEnum(ZoneCategory), nullable=False, index=True)
    temperature = Column(String, nullable=True)
    # Ordem de cadastro: a primeira câmara de cada categoria é a que recebe os scans
    sort_order = Column(Integer, nullable=False, default=0)

    racks = relationship(
        "Rack",
        back_populates="zone",
        cascade="all, delete-orphan",
        order_by="Rack.id"
    )
