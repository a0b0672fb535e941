from pydantic import BaseModel
from typing import Optional
from schemas.location_schemas import RackLocation, RejectionCode


class ScanPutawayRequest(BaseModel):
    """Request para localizar um LPN pendente escaneando o código do slot"""
    lpn: str
    location_code: str  # "SE-A-1-5"


class ScanResponse(BaseModel):
    """Response do scan"""
    success: bool
    lpn: str
    message: str
    location_code: Optional[str] = None
    location: Optional[RackLocation] = None
    applied: bool = False
    error: Optional[RejectionCode] = None
    existing_location: Optional[RackLocation] = None
