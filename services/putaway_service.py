"""
Serviço de localização por scan (LPN + código do slot):
monta as fotografias, consulta o resolver e aplica o comando
"""
import logging
from sqlalchemy.orm import Session
from schemas.location_schemas import AssignmentResult
from services.errors import AssignmentConflict
from services.inventory_service import InventoryService
from services.location_resolver import resolve_assignment
from services.topology_service import TopologyService

logger = logging.getLogger(__name__)


class PutawayService:
    """Gerencia a localização de pallets pendentes em slots"""

    @staticmethod
    def resolve(db: Session, lpn: str, location_code: str) -> AssignmentResult:
        """Decide a localização sem alterar nada (dry run)"""
        topology = TopologyService.build_snapshot(db)
        inventory = InventoryService.build_snapshot(db)
        return resolve_assignment(topology, inventory, location_code, lpn)

    @staticmethod
    def scan(db: Session, lpn: str, location_code: str) -> dict:
        """
        Resolve e aplica a localização.

        Retorna:
            {
                "result": AssignmentResult,
                "applied": bool
            }
        """
        result = PutawayService.resolve(db, lpn, location_code)
        if not result.success:
            logger.warning(
                "Localização recusada %s -> %s: %s",
                result.lpn, result.location_code, result.error.value
            )
            return {"result": result, "applied": False}

        try:
            InventoryService.apply_assignment(db, result.command, result.location_code)
        except AssignmentConflict as e:
            # O slot ou o LPN mudou entre a decisão e a gravação
            logger.warning("Conflito ao aplicar %s -> %s: %s", result.lpn, result.location_code, e)
            result = result.model_copy(update={
                "success": False,
                "command": None,
                "error": e.code,
                "message": str(e),
                "existing_location": e.existing_location
            })
            return {"result": result, "applied": False}

        return {"result": result, "applied": True}
