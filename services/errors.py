from typing import Optional
from schemas.location_schemas import RackLocation, RejectionCode


class ServiceError(Exception):
    """Erro de regra de negócio reportado ao operador"""


class NotFoundError(ServiceError):
    pass


class TopologyError(ServiceError):
    pass


class InventoryError(ServiceError):
    pass


class AssignmentConflict(ServiceError):
    """Localização recusada no momento de aplicar o comando"""

    def __init__(
        self,
        code: RejectionCode,
        message: str,
        existing_location: Optional[RackLocation] = None
    ):
        super().__init__(message)
        self.code = code
        self.existing_location = existing_location
