"""
Aplicação principal FastAPI para recepção, localização e controle de estoque em racks
"""
import logging
import os
from fastapi import FastAPI, Request, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from sqlalchemy import func
from models.database import get_db, Base, engine
from models.inventory_item import InventoryItem
from models.movement import Movement
from models.slot import Slot
from models.zone import Zone
from models.rack import Rack
from routers import topology_router, reception_router, inventory_router, putaway_router, labels_router
from services.errors import NotFoundError, ServiceError
from services.expiry_service import ExpiryService
from schemas.inventory_schemas import ExpiryStatus

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO"),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)

# Criar diretório storage se não existir
os.makedirs("storage", exist_ok=True)

# Criar app FastAPI
app = FastAPI(title="SmartRack WMS", description="Recepção, localização em racks e controle de vencimentos")

app.include_router(topology_router)
app.include_router(reception_router)
app.include_router(inventory_router)
app.include_router(putaway_router)
app.include_router(labels_router)


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError):
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.on_event("startup")
async def startup_event():
    """Inicializar banco de dados na startup"""
    Base.metadata.create_all(bind=engine)
    logger.info("Banco inicializado")


@app.get("/")
async def dashboard(db: Session = Depends(get_db)):
    """Resumo do armazém"""
    total_slots = db.query(func.count(Slot.id)).scalar() or 0
    blocked_slots = db.query(func.count(Slot.id)).filter(Slot.blocked == True).scalar() or 0  # noqa: E712
    located = db.query(func.count(InventoryItem.id)).filter(InventoryItem.rack_id.isnot(None)).scalar() or 0
    pending = db.query(func.count(InventoryItem.id)).filter(InventoryItem.rack_id.is_(None)).scalar() or 0
    # Pallets em slots que foram bloqueados depois da localização
    located_blocked = db.query(func.count(InventoryItem.id)).join(
        Slot,
        (Slot.rack_id == InventoryItem.rack_id)
        & (Slot.level == InventoryItem.level)
        & (Slot.position == InventoryItem.position)
    ).filter(Slot.blocked == True).scalar() or 0  # noqa: E712

    # Contar alertas de vencimento
    critical = 0
    warning = 0
    for (expiration_date,) in db.query(InventoryItem.expiration_date).all():
        status = ExpiryService.classify(expiration_date)
        if status == ExpiryStatus.CRITICAL:
            critical += 1
        elif status == ExpiryStatus.WARNING:
            warning += 1

    # Últimos movimentos
    recent_movements = db.query(Movement).order_by(Movement.ts.desc(), Movement.id.desc()).limit(10).all()

    return {
        "zones": db.query(func.count(Zone.id)).scalar() or 0,
        "racks": db.query(func.count(Rack.id)).scalar() or 0,
        "total_slots": total_slots,
        "blocked_slots": blocked_slots,
        "free_slots": total_slots - blocked_slots - (located - located_blocked),
        "located_items": located,
        "pending_items": pending,
        "expiry_critical": critical,
        "expiry_warning": warning,
        "recent_movements": [
            {
                "lpn": m.lpn,
                "type": m.type.value,
                "location_code": m.location_code,
                "ts": m.ts.isoformat() if m.ts else None
            }
            for m in recent_movements
        ]
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
