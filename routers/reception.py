"""
Rotas para recepção de pallets e catálogo
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List
from models.database import get_db
from schemas.inventory_schemas import (
    ProductResponse,
    ReceiveSingleRequest,
    ReceiveMixedRequest,
    ReceiveResponse,
    InventoryItemResponse,
)
from services.inventory_service import InventoryService

router = APIRouter(tags=["reception"])


@router.get("/catalog", response_model=List[ProductResponse])
async def list_catalog(db: Session = Depends(get_db)):
    return InventoryService.list_catalog(db)


@router.post("/reception/single", response_model=ReceiveResponse, status_code=201)
async def receive_single(request: ReceiveSingleRequest, db: Session = Depends(get_db)):
    """
    Recebe um pallet de produto único; o LPN é gerado e o item fica pendente
    """
    item, warning = InventoryService.receive_single(
        db,
        request.product_code,
        request.quantity,
        request.expiration_date,
        request.received_by
    )
    return ReceiveResponse(item=InventoryService.to_response(item), warning=warning)


@router.post("/reception/mixed", response_model=ReceiveResponse, status_code=201)
async def receive_mixed(request: ReceiveMixedRequest, db: Session = Depends(get_db)):
    """Recebe um pallet misto (várias referências)"""
    item, warning = InventoryService.receive_mixed(
        db,
        [line.model_dump() for line in request.items],
        request.received_by
    )
    return ReceiveResponse(item=InventoryService.to_response(item), warning=warning)


@router.get("/reception/pending", response_model=List[InventoryItemResponse])
async def list_pending(db: Session = Depends(get_db)):
    """Pallets recebidos aguardando localização"""
    return [InventoryService.to_response(i) for i in InventoryService.list_pending(db)]
