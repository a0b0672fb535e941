"""
Serviço de configuração do armazém: câmaras, racks e bloqueio de slots
"""
import logging
from sqlalchemy import func
from sqlalchemy.orm import Session
from typing import List, Optional
from models.zone import Zone, ZoneCategory
from models.rack import Rack
from models.slot import Slot, SlotStatus
from models.inventory_item import InventoryItem
from services.codecs import format_location_code, is_valid_aisle, normalize_aisle
from services.errors import NotFoundError, TopologyError
from services.snapshots import RackView, TopologySnapshot, ZoneView, InventorySnapshot

logger = logging.getLogger(__name__)


class TopologyService:
    """Gerencia câmaras, racks e slots"""

    @staticmethod
    def list_zones(db: Session) -> List[Zone]:
        return db.query(Zone).order_by(Zone.sort_order, Zone.id).all()

    @staticmethod
    def get_zone(db: Session, zone_id: str) -> Zone:
        zone = db.query(Zone).filter(Zone.id == zone_id).first()
        if not zone:
            raise NotFoundError(f"Câmara {zone_id} não encontrada")
        return zone

    @staticmethod
    def add_zone(
        db: Session,
        name: str,
        category: ZoneCategory,
        temperature: Optional[str] = None,
        zone_id: Optional[str] = None
    ) -> Zone:
        """
        Cadastra uma câmara no fim da ordem de cadastro.
        Uma câmara por categoria: o código de zona só alcança a primeira.
        """
        name = (name or "").strip()
        if not name:
            raise TopologyError("Nome da câmara é obrigatório")

        category = ZoneCategory(category)
        same_category = db.query(Zone).filter(Zone.category == category).first()
        if same_category:
            raise TopologyError(
                f"Já existe a câmara {same_category.id} com categoria {category.value}"
            )

        next_order = (db.query(func.max(Zone.sort_order)).scalar() or 0) + 1
        if zone_id is None:
            zone_id = f"zone-{next_order}"
            while db.query(Zone).filter(Zone.id == zone_id).first():
                next_order += 1
                zone_id = f"zone-{next_order}"
        elif db.query(Zone).filter(Zone.id == zone_id).first():
            raise TopologyError(f"Câmara {zone_id} já existe")

        zone = Zone(
            id=zone_id,
            name=name,
            category=category,
            temperature=temperature,
            sort_order=next_order
        )
        db.add(zone)
        db.commit()
        db.refresh(zone)
        logger.info("Câmara %s (%s) criada", zone.id, zone.category.value)
        return zone

    @staticmethod
    def delete_zone(db: Session, zone_id: str) -> None:
        """Remove a câmara e seus racks (recusa se houver estoque localizado)"""
        zone = TopologyService.get_zone(db, zone_id)
        rack_ids = [rack.id for rack in zone.racks]
        TopologyService._ensure_racks_empty(db, rack_ids)

        db.delete(zone)
        db.commit()
        logger.info("Câmara %s removida com %d racks", zone_id, len(rack_ids))

    @staticmethod
    def list_racks(db: Session, zone_id: Optional[str] = None) -> List[Rack]:
        query = db.query(Rack)
        if zone_id:
            query = query.filter(Rack.zone_id == zone_id)
        return query.order_by(Rack.id).all()

    @staticmethod
    def get_rack(db: Session, rack_id: int) -> Rack:
        rack = db.query(Rack).filter(Rack.id == rack_id).first()
        if not rack:
            raise NotFoundError(f"Rack {rack_id} não encontrado")
        return rack

    @staticmethod
    def add_rack(
        db: Session,
        zone_id: str,
        aisle: str,
        levels: int,
        positions_per_level: int
    ) -> Rack:
        """
        Cria um rack com id = maior id + 1 e gera um slot por (nível, posição).
        Os slots nunca são redimensionados depois. O corredor é único entre
        as câmaras da mesma categoria, senão o código impresso levaria a outro rack.
        """
        zone = TopologyService.get_zone(db, zone_id)

        aisle = normalize_aisle(aisle or "")
        if not is_valid_aisle(aisle):
            raise TopologyError(f"Corredor '{aisle}' inválido: use apenas letras e números")
        if levels < 1 or positions_per_level < 1:
            raise TopologyError("Rack precisa de ao menos 1 nível e 1 posição")

        taken = db.query(Rack).join(Zone, Rack.zone_id == Zone.id).filter(
            Zone.category == zone.category,
            Rack.aisle == aisle
        ).first()
        if taken:
            raise TopologyError(
                f"Corredor {aisle} já usado pelo rack {taken.id}; "
                f"o código {format_location_code(zone.category, aisle, 1, 1)} seria ambíguo"
            )

        rack_id = (db.query(func.max(Rack.id)).scalar() or 0) + 1
        rack = Rack(
            id=rack_id,
            zone_id=zone_id,
            aisle=aisle,
            levels=levels,
            positions_per_level=positions_per_level
        )
        db.add(rack)

        for level in range(1, levels + 1):
            for position in range(1, positions_per_level + 1):
                db.add(Slot(rack_id=rack_id, level=level, position=position, blocked=False))

        db.commit()
        db.refresh(rack)
        logger.info(
            "Rack %d criado na câmara %s (corredor %s, %dx%d)",
            rack.id, zone_id, aisle, levels, positions_per_level
        )
        return rack

    @staticmethod
    def delete_rack(db: Session, rack_id: int) -> None:
        rack = TopologyService.get_rack(db, rack_id)
        TopologyService._ensure_racks_empty(db, [rack.id])
        db.delete(rack)
        db.commit()
        logger.info("Rack %d removido", rack_id)

    @staticmethod
    def toggle_block_slot(db: Session, rack_id: int, level: int, position: int) -> Slot:
        """Inverte o flag de bloqueio (manutenção) de um slot"""
        slot = db.query(Slot).filter(
            Slot.rack_id == rack_id,
            Slot.level == level,
            Slot.position == position
        ).first()
        if not slot:
            raise NotFoundError(f"Slot {level}-{position} não existe no rack {rack_id}")

        slot.blocked = not slot.blocked
        db.commit()
        db.refresh(slot)
        logger.info(
            "Slot %d-%d-%d %s", rack_id, level, position,
            "bloqueado" if slot.blocked else "desbloqueado"
        )
        return slot

    @staticmethod
    def build_snapshot(db: Session) -> TopologySnapshot:
        """Fotografia imutável de zonas e racks (com slots bloqueados)"""
        zones = [
            ZoneView(id=z.id, name=z.name, category=z.category)
            for z in TopologyService.list_zones(db)
        ]

        blocked = {}
        for rack_id, level, position in db.query(
            Slot.rack_id, Slot.level, Slot.position
        ).filter(Slot.blocked == True).all():  # noqa: E712
            blocked.setdefault(rack_id, set()).add((level, position))

        racks = [
            RackView(
                id=r.id,
                zone_id=r.zone_id,
                aisle=r.aisle,
                levels=r.levels,
                positions_per_level=r.positions_per_level,
                blocked=frozenset(blocked.get(r.id, ()))
            )
            for r in TopologyService.list_racks(db)
        ]
        return TopologySnapshot(zones, racks)

    @staticmethod
    def rack_layout(rack: Rack, inventory: InventorySnapshot) -> List[dict]:
        """Estado derivado de cada slot do rack (vazio, ocupado ou bloqueado)"""
        layout = []
        for slot in sorted(rack.slots, key=lambda s: (s.level, s.position)):
            occupant = inventory.occupant(rack.id, slot.level, slot.position)
            if slot.blocked:
                status = SlotStatus.BLOCKED
            elif occupant is not None:
                status = SlotStatus.OCCUPIED
            else:
                status = SlotStatus.EMPTY
            layout.append({
                "rack_id": rack.id,
                "level": slot.level,
                "position": slot.position,
                "location_code": format_location_code(
                    rack.zone.category, rack.aisle, slot.level, slot.position
                ),
                "status": status,
                "lpn": occupant.lpn if occupant is not None and not slot.blocked else None
            })
        return layout

    @staticmethod
    def _ensure_racks_empty(db: Session, rack_ids: List[int]) -> None:
        if not rack_ids:
            return
        located = db.query(func.count(InventoryItem.id)).filter(
            InventoryItem.rack_id.in_(rack_ids)
        ).scalar() or 0
        if located:
            raise TopologyError(
                f"Existem {located} pallets localizados nos racks {rack_ids}; despache-os antes"
            )
