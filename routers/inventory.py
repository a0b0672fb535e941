"""
Rotas para consulta, despacho e evidências do inventário
"""
from datetime import date
from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response
from sqlalchemy.orm import Session
from typing import List, Optional
from models.database import get_db
from schemas.inventory_schemas import (
    BulkResult,
    InventoryItemResponse,
    LpnListRequest,
    PhotoRequest,
)
from services.inventory_service import InventoryService
from services.expiry_service import ExpiryService

router = APIRouter(prefix="/inventory", tags=["inventory"])


@router.get("", response_model=List[InventoryItemResponse])
async def list_inventory(
    query: Optional[str] = Query(None, description="Busca por LPN ou produto"),
    db: Session = Depends(get_db)
):
    items = InventoryService.search(db, query) if query else InventoryService.list_items(db)
    return [InventoryService.to_response(i) for i in items]


@router.get("/expiring", response_model=List[InventoryItemResponse])
async def list_expiring(
    within_days: int = Query(ExpiryService.DIAS_ALERTA, ge=0, le=3650),
    db: Session = Depends(get_db)
):
    """Pallets que vencem em até within_days dias (inclui vencidos)"""
    items = InventoryService.expiring(db, within_days, date.today())
    return [InventoryService.to_response(i) for i in items]


@router.get("/export.csv")
async def export_located_stock(db: Session = Depends(get_db)):
    """Exporta o estoque localizado em racks"""
    content = InventoryService.export_located_csv(db)
    filename = f"stock_smartrack_{date.today().isoformat()}.csv"
    return Response(
        content=content,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'}
    )


@router.post("/dispatch", response_model=BulkResult)
async def dispatch(request: LpnListRequest, db: Session = Depends(get_db)):
    """Saída por venda / cross-docking"""
    processed, not_found = InventoryService.dispatch(db, request.lpns)
    return BulkResult(processed=processed, not_found=not_found)


@router.post("/remove", response_model=BulkResult)
async def remove(request: LpnListRequest, db: Session = Depends(get_db)):
    """Elimina registros lançados por erro"""
    processed, not_found = InventoryService.remove(db, request.lpns)
    return BulkResult(processed=processed, not_found=not_found)


@router.get("/{lpn}", response_model=InventoryItemResponse)
async def get_item(lpn: str, db: Session = Depends(get_db)):
    return InventoryService.to_response(InventoryService.get_item(db, lpn))


@router.post("/{lpn}/photos", response_model=InventoryItemResponse)
async def add_photo(lpn: str, request: PhotoRequest, db: Session = Depends(get_db)):
    item = InventoryService.add_photo(db, lpn, request.data_url)
    return InventoryService.to_response(item)


@router.delete("/{lpn}/photos/{index}", response_model=InventoryItemResponse)
async def delete_photo(lpn: str, index: int, db: Session = Depends(get_db)):
    item = InventoryService.delete_photo(db, lpn, index)
    return InventoryService.to_response(item)
