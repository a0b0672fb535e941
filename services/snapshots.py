"""
Fotografias imutáveis da topologia e do inventário consumidas pelo resolver
"""
from typing import Dict, FrozenSet, Iterable, List, NamedTuple, Optional, Tuple
from models.zone import ZoneCategory
from schemas.location_schemas import RackLocation

SlotKey = Tuple[int, int, int]  # (rack_id, level, position)


class ZoneView(NamedTuple):
    id: str
    name: str
    category: ZoneCategory


class RackView(NamedTuple):
    id: int
    zone_id: str
    aisle: str
    levels: int
    positions_per_level: int
    blocked: FrozenSet[Tuple[int, int]] = frozenset()  # {(level, position)}

    def contains(self, level: int, position: int) -> bool:
        return 1 <= level <= self.levels and 1 <= position <= self.positions_per_level

    def is_blocked(self, level: int, position: int) -> bool:
        return (level, position) in self.blocked


class ItemView(NamedTuple):
    lpn: str
    location: Optional[RackLocation] = None


class TopologySnapshot:
    """Zonas na ordem de cadastro e racks ordenados por id"""

    def __init__(self, zones: Iterable[ZoneView], racks: Iterable[RackView]):
        self.zones: List[ZoneView] = list(zones)
        self.racks: List[RackView] = sorted(racks, key=lambda r: r.id)

    def first_zone_with_category(self, category: ZoneCategory) -> Optional[ZoneView]:
        for zone in self.zones:
            if zone.category == category:
                return zone
        return None

    def find_rack(self, zone_id: str, aisle: str) -> Optional[RackView]:
        for rack in self.racks:
            if rack.zone_id == zone_id and rack.aisle == aisle:
                return rack
        return None

    def zone_of(self, rack: RackView) -> Optional[ZoneView]:
        for zone in self.zones:
            if zone.id == rack.zone_id:
                return zone
        return None


class InventorySnapshot:
    """
    Itens ativos com índice de ocupação por (rack_id, level, position)
    e índice por LPN, montados uma vez na construção.
    """

    def __init__(self, items: Iterable[ItemView]):
        self._by_lpn: Dict[str, ItemView] = {}
        self._by_slot: Dict[SlotKey, ItemView] = {}
        for item in items:
            self._by_lpn[item.lpn] = item
            if item.location is not None:
                loc = item.location
                self._by_slot[(loc.rack_id, loc.level, loc.position)] = item

    def __len__(self):
        return len(self._by_lpn)

    def find(self, lpn: str) -> Optional[ItemView]:
        return self._by_lpn.get(lpn)

    def occupant(self, rack_id: int, level: int, position: int) -> Optional[ItemView]:
        return self._by_slot.get((rack_id, level, position))

    def is_pending(self, lpn: str) -> bool:
        item = self._by_lpn.get(lpn)
        return item is not None and item.location is None
