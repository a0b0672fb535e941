from .database import Base, get_db, engine
from .zone import Zone, ZoneCategory
from .rack import Rack
from .slot import Slot, SlotStatus
from .product import Product
from .inventory_item import InventoryItem, MixedItem, PalletKind
from .sequence import Sequence
from .movement import Movement, MovementType

__all__ = [
    "Base",
    "get_db",
    "engine",
    "Zone",
    "ZoneCategory",
    "Rack",
    "Slot",
    "SlotStatus",
    "Product",
    "InventoryItem",
    "MixedItem",
    "PalletKind",
    "Sequence",
    "Movement",
    "MovementType",
]
