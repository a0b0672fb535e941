from sqlalchemy import Column, Integer, String, DateTime, JSON, Enum as SQLEnum
from sqlalchemy.sql import func
from .database import Base
import enum


class MovementType(str, enum.Enum):
    RECEIVE = "RECEIVE"
    PUTAWAY = "PUTAWAY"
    DISPATCH = "DISPATCH"
    REMOVE = "REMOVE"


class Movement(Base):
    """Auditoria de movimentos de pallets

    Sem FK para o item: o registro sobrevive ao despacho.
    """
    __tablename__ = "movements"

    id = Column(Integer, primary_key=True, index=True)
    lpn = Column(String, nullable=False, index=True)
    type = Column(SQLEnum(MovementType), nullable=False)
    rack_id = Column(Integer, nullable=True)
    level = Column(Integer, nullable=True)
    position = Column(Integer, nullable=True)
    location_code = Column(String, nullable=True)
    ts = Column(DateTime, server_default=func.now(), nullable=False)
    meta_json = Column(JSON, nullable=True)
