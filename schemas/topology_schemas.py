from pydantic import BaseModel, Field
from typing import List, Optional
from models.zone import ZoneCategory
from models.slot import SlotStatus


class ZoneCreate(BaseModel):
    """Request para criar uma câmara"""
    name: str = Field(..., min_length=1)
    category: ZoneCategory
    temperature: Optional[str] = None


class ZoneResponse(BaseModel):
    id: str
    name: str
    category: ZoneCategory
    zone_code: str
    temperature: Optional[str] = None


class RackCreate(BaseModel):
    """Request para criar um rack (gera todos os slots)"""
    zone_id: str
    aisle: str = Field(..., min_length=1)
    levels: int = Field(..., ge=1, le=50)
    positions_per_level: int = Field(..., ge=1, le=100)


class RackResponse(BaseModel):
    id: int
    zone_id: str
    aisle: str
    levels: int
    positions_per_level: int
    blocked_slots: int = 0

    class Config:
        from_attributes = True


class SlotStateResponse(BaseModel):
    """Estado derivado de um slot"""
    rack_id: int
    level: int
    position: int
    location_code: str
    status: SlotStatus
    lpn: Optional[str] = None


class RackLayoutResponse(BaseModel):
    rack: RackResponse
    slots: List[SlotStateResponse]
