"""
Códigos textuais do armazém:
- Código de localização ZZ-A-P-L (zona, corredor, posição, nível), ex: "SE-A-1-5"
- LPN: YYMMDD + correlativo de 8 dígitos, ex: "25112600000026"
"""
import re
from datetime import date
from typing import NamedTuple, Optional
from models.zone import ZoneCategory

ZONE_CODES = {
    ZoneCategory.DRY: "SE",
    ZoneCategory.COLD: "RF",
    ZoneCategory.FROZEN: "CG",
}
CATEGORY_BY_CODE = {code: category for category, code in ZONE_CODES.items()}

LOCATION_CODE_RE = re.compile(r"^([A-Z]{2})-([A-Z0-9]+)-(\d+)-(\d+)$")
AISLE_RE = re.compile(r"^[A-Z0-9]+$")

LPN_SEQUENCE_DIGITS = 8


class ParsedLocationCode(NamedTuple):
    zone_code: str
    category: Optional[ZoneCategory]  # None quando o código de zona não é conhecido
    aisle: str
    position: int
    level: int


def zone_code_for(category: ZoneCategory) -> str:
    """Converte categoria de câmara para o código de 2 letras."""
    return ZONE_CODES[ZoneCategory(category)]


def category_for_code(zone_code: str) -> Optional[ZoneCategory]:
    """Converte código de 2 letras para categoria (None se desconhecido)."""
    return CATEGORY_BY_CODE.get(zone_code.strip().upper())


def normalize_aisle(aisle: str) -> str:
    return aisle.strip().upper()


def is_valid_aisle(aisle: str) -> bool:
    return bool(AISLE_RE.match(aisle))


def format_location_code(category: ZoneCategory, aisle: str, level: int, position: int) -> str:
    """
    Gera o código canônico impresso nas etiquetas de slot.
    Atenção à ordem: posição antes do nível.
    """
    return f"{zone_code_for(category)}-{normalize_aisle(aisle)}-{position}-{level}"


def parse_location_code(raw: str) -> Optional[ParsedLocationCode]:
    """
    Interpreta um código escaneado (ignora espaços nas pontas e caixa).
    Retorna None se o formato for inválido.
    """
    if raw is None:
        return None
    match = LOCATION_CODE_RE.match(raw.strip().upper())
    if not match:
        return None
    zone_code, aisle, position, level = match.groups()
    return ParsedLocationCode(
        zone_code=zone_code,
        category=CATEGORY_BY_CODE.get(zone_code),
        aisle=aisle,
        position=int(position),
        level=int(level),
    )


def generate_lpn(correlative: int, today: Optional[date] = None) -> str:
    """Gera LPN no formato YYMMDD + correlativo de 8 dígitos."""
    today = today or date.today()
    return f"{today:%y%m%d}{correlative:0{LPN_SEQUENCE_DIGITS}d}"
