"""
Rotas para configuração de câmaras, racks e slots
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional
from models.database import get_db
from schemas.topology_schemas import (
    ZoneCreate,
    ZoneResponse,
    RackCreate,
    RackResponse,
    RackLayoutResponse,
    SlotStateResponse,
)
from services.codecs import zone_code_for
from services.inventory_service import InventoryService
from services.topology_service import TopologyService

router = APIRouter(tags=["topology"])


def _zone_response(zone) -> ZoneResponse:
    return ZoneResponse(
        id=zone.id,
        name=zone.name,
        category=zone.category,
        zone_code=zone_code_for(zone.category),
        temperature=zone.temperature
    )


def _rack_response(rack) -> RackResponse:
    return RackResponse(
        id=rack.id,
        zone_id=rack.zone_id,
        aisle=rack.aisle,
        levels=rack.levels,
        positions_per_level=rack.positions_per_level,
        blocked_slots=sum(1 for s in rack.slots if s.blocked)
    )


@router.get("/zones", response_model=List[ZoneResponse])
async def list_zones(db: Session = Depends(get_db)):
    """Lista câmaras na ordem de cadastro"""
    return [_zone_response(z) for z in TopologyService.list_zones(db)]


@router.post("/zones", response_model=ZoneResponse, status_code=201)
async def create_zone(request: ZoneCreate, db: Session = Depends(get_db)):
    zone = TopologyService.add_zone(db, request.name, request.category, request.temperature)
    return _zone_response(zone)


@router.delete("/zones/{zone_id}", status_code=204)
async def delete_zone(zone_id: str, db: Session = Depends(get_db)):
    """Remove a câmara e todos os seus racks"""
    TopologyService.delete_zone(db, zone_id)


@router.get("/racks", response_model=List[RackResponse])
async def list_racks(
    zone_id: Optional[str] = Query(None),
    db: Session = Depends(get_db)
):
    return [_rack_response(r) for r in TopologyService.list_racks(db, zone_id)]


@router.post("/racks", response_model=RackResponse, status_code=201)
async def create_rack(request: RackCreate, db: Session = Depends(get_db)):
    """Cria um rack e gera seus slots"""
    rack = TopologyService.add_rack(
        db,
        request.zone_id,
        request.aisle,
        request.levels,
        request.positions_per_level
    )
    return _rack_response(rack)


@router.delete("/racks/{rack_id}", status_code=204)
async def delete_rack(rack_id: int, db: Session = Depends(get_db)):
    TopologyService.delete_rack(db, rack_id)


@router.get("/racks/{rack_id}/slots", response_model=RackLayoutResponse)
async def get_rack_layout(rack_id: int, db: Session = Depends(get_db)):
    """Estado de cada slot do rack (vazio, ocupado, bloqueado)"""
    rack = TopologyService.get_rack(db, rack_id)
    inventory = InventoryService.build_snapshot(db)
    return RackLayoutResponse(
        rack=_rack_response(rack),
        slots=[SlotStateResponse(**s) for s in TopologyService.rack_layout(rack, inventory)]
    )


@router.post("/racks/{rack_id}/slots/{level}/{position}/block", response_model=SlotStateResponse)
async def toggle_block_slot(
    rack_id: int,
    level: int,
    position: int,
    db: Session = Depends(get_db)
):
    """Bloqueia/desbloqueia um slot (manutenção)"""
    TopologyService.toggle_block_slot(db, rack_id, level, position)
    rack = TopologyService.get_rack(db, rack_id)
    inventory = InventoryService.build_snapshot(db)
    layout = TopologyService.rack_layout(rack, inventory)
    slot = next(s for s in layout if s["level"] == level and s["position"] == position)
    return SlotStateResponse(**slot)
