"""
Rotas para etiquetas imprimíveis
"""
from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse
from sqlalchemy.orm import Session
from models.database import get_db
from services.inventory_service import InventoryService
from services.label_service import LabelService
from services.topology_service import TopologyService

router = APIRouter(prefix="/labels", tags=["labels"])


@router.get("/racks/{rack_id}", response_class=HTMLResponse)
async def rack_slot_labels(rack_id: int, db: Session = Depends(get_db)):
    """Etiquetas dos slots livres do rack"""
    rack = TopologyService.get_rack(db, rack_id)
    inventory = InventoryService.build_snapshot(db)
    return HTMLResponse(content=LabelService.slot_labels(rack, inventory))


@router.get("/pallets/{lpn}", response_class=HTMLResponse)
async def pallet_label(lpn: str, db: Session = Depends(get_db)):
    item = InventoryService.get_item(db, lpn)
    return HTMLResponse(content=LabelService.pallet_label(item))
