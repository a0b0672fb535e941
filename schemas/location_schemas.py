from pydantic import BaseModel
from typing import Optional
import enum


class RackLocation(BaseModel):
    """Localização física de um pallet"""
    aisle: str
    rack_id: int
    level: int
    position: int

    class Config:
        frozen = True


class AssignmentCommand(BaseModel):
    """Comando de localização autorizado pelo resolver (aplicado pelo chamador)"""
    lpn: str
    location: RackLocation

    class Config:
        frozen = True


class RejectionCode(str, enum.Enum):
    MALFORMED_LOCATION_CODE = "MALFORMED_LOCATION_CODE"
    UNKNOWN_ZONE_CODE = "UNKNOWN_ZONE_CODE"
    RACK_NOT_FOUND = "RACK_NOT_FOUND"
    SLOT_OUT_OF_RANGE = "SLOT_OUT_OF_RANGE"
    SLOT_BLOCKED = "SLOT_BLOCKED"
    SLOT_OCCUPIED = "SLOT_OCCUPIED"
    LPN_UNKNOWN = "LPN_UNKNOWN"
    LPN_ALREADY_ASSIGNED = "LPN_ALREADY_ASSIGNED"


class AssignmentResult(BaseModel):
    """Decisão do resolver: comando de localização ou rejeição tipada"""
    success: bool
    lpn: str
    location_code: str
    message: str
    command: Optional[AssignmentCommand] = None
    error: Optional[RejectionCode] = None
    existing_location: Optional[RackLocation] = None
