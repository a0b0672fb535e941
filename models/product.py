from sqlalchemy import Column, Integer, String, Enum as SQLEnum
from .database import Base
from .zone import ZoneCategory


class Product(Base):
    """Catálogo de produtos aceitos na recepção"""
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    code = Column(String, unique=True, nullable=False, index=True)  # SKU ou EAN
    name = Column(String, nullable=False)
    category = Column(String, nullable=False)
    default_zone_category = Column(SQLEnum(ZoneCategory), nullable=True)
