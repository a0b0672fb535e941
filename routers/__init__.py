from .topology import router as topology_router
from .reception import router as reception_router
from .inventory import router as inventory_router
from .putaway import router as putaway_router
from .labels import router as labels_router

__all__ = ["topology_router", "reception_router", "inventory_router", "putaway_router", "labels_router"]
