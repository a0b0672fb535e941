from sqlalchemy import Column, Integer, String
from .database import Base


class Sequence(Base):
    """Contadores nomeados (correlativo do LPN)"""
    __tablename__ = "sequences"

    name = Column(String, primary_key=True)
    value = Column(Integer, nullable=False)
