from sqlalchemy import Column, Integer, String, Date, DateTime, ForeignKey, JSON, UniqueConstraint, Enum as SQLEnum
from sqlalchemy.orm import relationship
from .database import Base
import enum


class PalletKind(str, enum.Enum):
    SINGLE = "SINGLE"
    MIXED = "MIXED"


class InventoryItem(Base):
    """Pallets recebidos, identificados pelo LPN

    rack_id nulo significa item pendente de localização.
    """
    __tablename__ = "inventory_items"

    id = Column(Integer, primary_key=True, index=True)
    lpn = Column(String, unique=True, nullable=False, index=True)
    kind = Column(SQLEnum(PalletKind), default=PalletKind.SINGLE, nullable=False)
    product_code = Column(String, nullable=False, index=True)
    product_name = Column(String, nullable=False)
    quantity = Column(Integer, nullable=False)
    expiration_date = Column(Date, nullable=False)
    reception_date = Column(DateTime, nullable=False)
    received_by = Column(String, nullable=False)
    photos = Column(JSON, nullable=False, default=list)

    aisle = Column(String, nullable=True)
    rack_id = Column(Integer, ForeignKey("racks.id"), nullable=True)
    level = Column(Integer, nullable=True)
    position = Column(Integer, nullable=True)

    rack = relationship("Rack")
    mixed_items = relationship(
        "MixedItem",
        back_populates="pallet",
        cascade="all, delete-orphan",
        order_by="MixedItem.id"
    )

    __table_args__ = (
        # Um slot guarda no máximo um pallet
        UniqueConstraint("rack_id", "level", "position", name="uq_item_slot"),
    )

    @property
    def is_pending(self) -> bool:
        return self.rack_id is None


class MixedItem(Base):
    """Linhas de conteúdo de um pallet misto"""
    __tablename__ = "mixed_items"

    id = Column(Integer, primary_key=True, index=True)
    pallet_id = Column(Integer, ForeignKey("inventory_items.id"), nullable=False, index=True)
    product_code = Column(String, nullable=False)
    product_name = Column(String, nullable=False)
    quantity = Column(Integer, nullable=False)
    expiration_date = Column(Date, nullable=False)

    pallet = relationship("InventoryItem", back_populates="mixed_items")
