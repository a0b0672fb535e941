"""
Rotas para localização de pallets por scan (LPN + código do slot)
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from models.database import get_db
from schemas.scan_schemas import ScanPutawayRequest, ScanResponse
from services.putaway_service import PutawayService

router = APIRouter(prefix="/putaway", tags=["putaway"])


def _scan_response(result, applied: bool) -> ScanResponse:
    return ScanResponse(
        success=result.success,
        lpn=result.lpn,
        message=result.message,
        location_code=result.location_code,
        location=result.command.location if result.command else None,
        applied=applied,
        error=result.error,
        existing_location=result.existing_location
    )


@router.post("/resolve", response_model=ScanResponse)
async def resolve_putaway(request: ScanPutawayRequest, db: Session = Depends(get_db)):
    """
    Valida o scan sem gravar (pré-visualização da localização)
    """
    result = PutawayService.resolve(db, request.lpn, request.location_code)
    return _scan_response(result, applied=False)


@router.post("/scan", response_model=ScanResponse)
async def scan_putaway(request: ScanPutawayRequest, db: Session = Depends(get_db)):
    """
    Scan de localização: valida e grava a localização do LPN pendente.
    Rejeições voltam com success=False e o código do erro.
    """
    outcome = PutawayService.scan(db, request.lpn, request.location_code)
    return _scan_response(outcome["result"], applied=outcome["applied"])
