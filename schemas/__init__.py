from .location_schemas import RackLocation, AssignmentCommand, AssignmentResult, RejectionCode
from .scan_schemas import ScanPutawayRequest, ScanResponse
from .topology_schemas import ZoneCreate, ZoneResponse, RackCreate, RackResponse, SlotStateResponse, RackLayoutResponse
from .inventory_schemas import (
    ExpiryStatus,
    ProductResponse,
    MixedItemSchema,
    ReceiveSingleRequest,
    ReceiveMixedRequest,
    ReceiveResponse,
    InventoryItemResponse,
    LpnListRequest,
    BulkResult,
    PhotoRequest,
)

__all__ = [
    "RackLocation",
    "AssignmentCommand",
    "AssignmentResult",
    "RejectionCode",
    "ScanPutawayRequest",
    "ScanResponse",
    "ZoneCreate",
    "ZoneResponse",
    "RackCreate",
    "RackResponse",
    "SlotStateResponse",
    "RackLayoutResponse",
    "ExpiryStatus",
    "ProductResponse",
    "MixedItemSchema",
    "ReceiveSingleRequest",
    "ReceiveMixedRequest",
    "ReceiveResponse",
    "InventoryItemResponse",
    "LpnListRequest",
    "BulkResult",
    "PhotoRequest",
]
