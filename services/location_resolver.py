"""
Resolver de localização por scan: valida o código ZZ-A-P-L contra a topologia,
confere o estado do slot e do LPN e devolve um comando de localização
ou uma rejeição tipada. Não altera nenhum store.
"""
from schemas.location_schemas import (
    AssignmentCommand,
    AssignmentResult,
    RackLocation,
    RejectionCode,
)
from services.codecs import parse_location_code
from services.snapshots import InventorySnapshot, TopologySnapshot

FORMAT_HINT = "Use: ZONA-CORREDOR-POS-NIV (ex. SE-A-1-5)"


def describe_location(location: RackLocation) -> str:
    """Texto curto da localização (corredor+rack-nível-posição)."""
    return f"{location.aisle}{location.rack_id}-{location.level}-{location.position}"


def _reject(lpn, code_text, error, message, existing_location=None) -> AssignmentResult:
    return AssignmentResult(
        success=False,
        lpn=lpn,
        location_code=code_text,
        error=error,
        message=message,
        existing_location=existing_location,
    )


def resolve_assignment(
    topology: TopologySnapshot,
    inventory: InventorySnapshot,
    raw_code: str,
    lpn: str,
) -> AssignmentResult:
    """
    Pipeline de validação (a primeira falha vence):
    1. formato do código
    2. código de zona -> primeira câmara da categoria
    3. rack da câmara com o corredor informado
    4. limites, bloqueio e ocupação do slot
    5. LPN pendente
    """
    lpn = (lpn or "").strip()
    code_text = (raw_code or "").strip().upper()

    parsed = parse_location_code(code_text)
    if parsed is None:
        return _reject(
            lpn, code_text, RejectionCode.MALFORMED_LOCATION_CODE,
            f"Formato inválido '{code_text}'. {FORMAT_HINT}"
        )

    zone = topology.first_zone_with_category(parsed.category) if parsed.category else None
    if zone is None:
        return _reject(
            lpn, code_text, RejectionCode.UNKNOWN_ZONE_CODE,
            f"Código de zona '{parsed.zone_code}' não reconhecido"
        )

    rack = topology.find_rack(zone.id, parsed.aisle)
    if rack is None:
        return _reject(
            lpn, code_text, RejectionCode.RACK_NOT_FOUND,
            f"Nenhum rack no corredor {parsed.aisle} / zona {parsed.zone_code}"
        )

    level, position = parsed.level, parsed.position
    if not rack.contains(level, position):
        return _reject(
            lpn, code_text, RejectionCode.SLOT_OUT_OF_RANGE,
            f"Localização {code_text} fora do rack {rack.id} "
            f"({rack.levels} níveis x {rack.positions_per_level} posições)"
        )

    if rack.is_blocked(level, position):
        return _reject(
            lpn, code_text, RejectionCode.SLOT_BLOCKED,
            f"Localização {code_text} está bloqueada"
        )

    occupant = inventory.occupant(rack.id, level, position)
    if occupant is not None:
        return _reject(
            lpn, code_text, RejectionCode.SLOT_OCCUPIED,
            f"Localização {code_text} já está ocupada pelo LPN {occupant.lpn}"
        )

    item = inventory.find(lpn)
    if item is None:
        return _reject(
            lpn, code_text, RejectionCode.LPN_UNKNOWN,
            f"LPN {lpn} não encontrado na recepção pendente"
        )
    if item.location is not None:
        return _reject(
            lpn, code_text, RejectionCode.LPN_ALREADY_ASSIGNED,
            f"O LPN {lpn} já está localizado em {describe_location(item.location)}",
            existing_location=item.location,
        )

    location = RackLocation(aisle=rack.aisle, rack_id=rack.id, level=level, position=position)
    return AssignmentResult(
        success=True,
        lpn=lpn,
        location_code=code_text,
        command=AssignmentCommand(lpn=lpn, location=location),
        message=f"Localizado corretamente: {lpn} -> {code_text}",
    )
