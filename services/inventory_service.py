"""
Serviço de inventário: recepção de pallets (único e misto), consulta,
aplicação de localizações, despacho e evidências fotográficas
"""
import csv
import io
import logging
import os
from datetime import date, datetime, timedelta
from typing import List, Optional, Tuple
from dotenv import load_dotenv
from sqlalchemy import func, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from models.inventory_item import InventoryItem, MixedItem, PalletKind
from models.movement import Movement, MovementType
from models.product import Product
from models.sequence import Sequence
from schemas.location_schemas import AssignmentCommand, RackLocation, RejectionCode
from services.codecs import format_location_code, generate_lpn
from services.errors import AssignmentConflict, InventoryError, NotFoundError
from services.expiry_service import ExpiryService
from services.snapshots import InventorySnapshot, ItemView

load_dotenv()

logger = logging.getLogger(__name__)

LPN_SEQUENCE_NAME = "lpn"
MIXED_PALLET_CODE = "MIXED-PALLET"

EXPORT_HEADERS = [
    "LPN", "Tipo", "Producto", "SKU", "Cantidad", "Vencimiento",
    "Fecha Recepcion", "Pasillo", "Rack", "Nivel", "Posicion"
]


class InventoryService:
    """Gerencia o ciclo de vida dos pallets: pendente -> localizado -> despachado"""

    LPN_SEQUENCE_START = int(os.getenv("LPN_SEQUENCE_START", "150"))
    MAX_PHOTOS = int(os.getenv("MAX_PHOTOS", "5"))
    DEFAULT_OPERATOR = os.getenv("DEFAULT_OPERATOR", "Operador 01")

    # --- LPN ---

    @staticmethod
    def next_lpn(db: Session, today: Optional[date] = None) -> str:
        """
        Avança o correlativo e gera o próximo LPN (YYMMDD + 8 dígitos).
        Não faz commit: o LPN só é consumido junto com o item recebido.
        """
        sequence = db.query(Sequence).filter(Sequence.name == LPN_SEQUENCE_NAME).first()
        if not sequence:
            sequence = Sequence(name=LPN_SEQUENCE_NAME, value=InventoryService.LPN_SEQUENCE_START)
            db.add(sequence)

        while True:
            sequence.value += 1
            lpn = generate_lpn(sequence.value, today)
            if not db.query(InventoryItem.id).filter(InventoryItem.lpn == lpn).first():
                return lpn

    # --- Catálogo ---

    @staticmethod
    def list_catalog(db: Session) -> List[Product]:
        return db.query(Product).order_by(Product.name).all()

    @staticmethod
    def get_product(db: Session, code: str) -> Product:
        product = db.query(Product).filter(Product.code == (code or "").strip()).first()
        if not product:
            raise NotFoundError(f"Produto {code} não encontrado no catálogo")
        return product

    @staticmethod
    def latest_expiration(db: Session, product_code: str) -> Optional[date]:
        """Maior vencimento já em estoque para o produto (pallets únicos e linhas mistas)"""
        single = db.query(func.max(InventoryItem.expiration_date)).filter(
            InventoryItem.product_code == product_code,
            InventoryItem.kind == PalletKind.SINGLE
        ).scalar()
        mixed = db.query(func.max(MixedItem.expiration_date)).filter(
            MixedItem.product_code == product_code
        ).scalar()
        dates = [d for d in (single, mixed) if d is not None]
        return max(dates) if dates else None

    @staticmethod
    def _fifo_warning(db: Session, product_code: str, expiration_date: date) -> Optional[str]:
        latest = InventoryService.latest_expiration(db, product_code)
        if latest and expiration_date < latest:
            return (
                f"ALERTA! {product_code} recebido com vencimento {expiration_date.isoformat()} "
                f"ANTERIOR ao que já existe em estoque ({latest.isoformat()})"
            )
        return None

    # --- Recepção ---

    @staticmethod
    def receive_single(
        db: Session,
        product_code: str,
        quantity: int,
        expiration_date: date,
        received_by: Optional[str] = None
    ) -> Tuple[InventoryItem, Optional[str]]:
        """Recebe um pallet de produto único (fica pendente de localização)"""
        if quantity < 1:
            raise InventoryError("Quantidade deve ser maior que zero")
        product = InventoryService.get_product(db, product_code)
        warning = InventoryService._fifo_warning(db, product.code, expiration_date)

        item = InventoryItem(
            lpn=InventoryService.next_lpn(db),
            kind=PalletKind.SINGLE,
            product_code=product.code,
            product_name=product.name,
            quantity=quantity,
            expiration_date=expiration_date,
            reception_date=datetime.now(),
            received_by=received_by or InventoryService.DEFAULT_OPERATOR,
            photos=[]
        )
        return InventoryService._store_received(db, item, warning)

    @staticmethod
    def receive_mixed(
        db: Session,
        lines: List[dict],
        received_by: Optional[str] = None
    ) -> Tuple[InventoryItem, Optional[str]]:
        """
        Recebe um pallet misto. Quantidade = soma das linhas,
        vencimento = vencimento mais próximo entre as linhas.
        """
        if not lines:
            raise InventoryError("Pallet misto precisa de ao menos um item")

        mixed_items = []
        warnings = []
        for line in lines:
            if line["quantity"] < 1:
                raise InventoryError("Quantidade deve ser maior que zero")
            product = InventoryService.get_product(db, line["product_code"])
            warning = InventoryService._fifo_warning(db, product.code, line["expiration_date"])
            if warning:
                warnings.append(warning)
            mixed_items.append(MixedItem(
                product_code=product.code,
                product_name=product.name,
                quantity=line["quantity"],
                expiration_date=line["expiration_date"]
            ))

        item = InventoryItem(
            lpn=InventoryService.next_lpn(db),
            kind=PalletKind.MIXED,
            product_code=MIXED_PALLET_CODE,
            product_name=f"PALLET MIXTO ({len(mixed_items)} Refs)",
            quantity=sum(m.quantity for m in mixed_items),
            expiration_date=min(m.expiration_date for m in mixed_items),
            reception_date=datetime.now(),
            received_by=received_by or InventoryService.DEFAULT_OPERATOR,
            photos=[],
            mixed_items=mixed_items
        )
        return InventoryService._store_received(db, item, "\n".join(warnings) or None)

    @staticmethod
    def _store_received(db: Session, item: InventoryItem, warning: Optional[str]):
        try:
            db.add(item)
            db.add(Movement(
                lpn=item.lpn,
                type=MovementType.RECEIVE,
                meta_json={"kind": item.kind.value, "quantity": item.quantity}
            ))
            db.commit()
        except Exception:
            db.rollback()
            raise
        db.refresh(item)
        logger.info("LPN %s recebido (%s, %d un.)", item.lpn, item.product_code, item.quantity)
        if warning:
            logger.warning("LPN %s: %s", item.lpn, warning)
        return item, warning

    # --- Consulta ---

    @staticmethod
    def get_item(db: Session, lpn: str) -> InventoryItem:
        item = db.query(InventoryItem).filter(InventoryItem.lpn == (lpn or "").strip()).first()
        if not item:
            raise NotFoundError(f"LPN {lpn} não encontrado")
        return item

    @staticmethod
    def list_items(db: Session) -> List[InventoryItem]:
        return db.query(InventoryItem).order_by(InventoryItem.reception_date, InventoryItem.id).all()

    @staticmethod
    def list_pending(db: Session) -> List[InventoryItem]:
        return db.query(InventoryItem).filter(
            InventoryItem.rack_id.is_(None)
        ).order_by(InventoryItem.reception_date, InventoryItem.id).all()

    @staticmethod
    def list_located(db: Session) -> List[InventoryItem]:
        return db.query(InventoryItem).filter(
            InventoryItem.rack_id.isnot(None)
        ).order_by(
            InventoryItem.rack_id, InventoryItem.level, InventoryItem.position
        ).all()

    @staticmethod
    def search(db: Session, query: str) -> List[InventoryItem]:
        """Busca por LPN, código ou nome do produto"""
        pattern = f"%{query.strip()}%"
        return db.query(InventoryItem).filter(or_(
            InventoryItem.lpn.ilike(pattern),
            InventoryItem.product_code.ilike(pattern),
            InventoryItem.product_name.ilike(pattern)
        )).order_by(InventoryItem.id).all()

    @staticmethod
    def expiring(db: Session, within_days: int, today: Optional[date] = None) -> List[InventoryItem]:
        """Pallets que vencem em até within_days dias (inclui vencidos), do mais urgente ao menos"""
        today = today or date.today()
        limit = today + timedelta(days=within_days)
        return db.query(InventoryItem).filter(
            InventoryItem.expiration_date <= limit
        ).order_by(InventoryItem.expiration_date, InventoryItem.id).all()

    @staticmethod
    def location_of(item: InventoryItem) -> Optional[RackLocation]:
        if item.rack_id is None:
            return None
        return RackLocation(
            aisle=item.aisle,
            rack_id=item.rack_id,
            level=item.level,
            position=item.position
        )

    @staticmethod
    def to_response(item: InventoryItem, today: Optional[date] = None) -> dict:
        """Converte o item para o formato de InventoryItemResponse"""
        location = InventoryService.location_of(item)
        location_code = None
        if location is not None and item.rack is not None:
            location_code = format_location_code(
                item.rack.zone.category, location.aisle, location.level, location.position
            )
        return {
            "lpn": item.lpn,
            "kind": item.kind,
            "product_code": item.product_code,
            "product_name": item.product_name,
            "quantity": item.quantity,
            "expiration_date": item.expiration_date,
            "reception_date": item.reception_date,
            "received_by": item.received_by,
            "photos": list(item.photos or []),
            "mixed_items": [
                {
                    "product_code": m.product_code,
                    "product_name": m.product_name,
                    "quantity": m.quantity,
                    "expiration_date": m.expiration_date
                }
                for m in item.mixed_items
            ],
            "location": location,
            "location_code": location_code,
            "days_to_expiry": ExpiryService.days_until(item.expiration_date, today),
            "expiry_status": ExpiryService.classify(item.expiration_date, today)
        }

    @staticmethod
    def build_snapshot(db: Session) -> InventorySnapshot:
        """Fotografia imutável dos itens ativos (LPN + localização)"""
        rows = db.query(
            InventoryItem.lpn,
            InventoryItem.aisle,
            InventoryItem.rack_id,
            InventoryItem.level,
            InventoryItem.position
        ).all()
        return InventorySnapshot(
            ItemView(
                lpn=lpn,
                location=RackLocation(aisle=aisle, rack_id=rack_id, level=level, position=position)
                if rack_id is not None else None
            )
            for lpn, aisle, rack_id, level, position in rows
        )

    # --- Localização ---

    @staticmethod
    def apply_assignment(db: Session, command: AssignmentCommand, location_code: Optional[str] = None) -> InventoryItem:
        """
        Aplica o comando do resolver. A atualização só acontece se o item
        ainda estiver pendente, e a unique de (rack_id, level, position)
        barra uma segunda localização no mesmo slot.
        """
        location = command.location
        try:
            updated = db.query(InventoryItem).filter(
                InventoryItem.lpn == command.lpn,
                InventoryItem.rack_id.is_(None)
            ).update({
                InventoryItem.aisle: location.aisle,
                InventoryItem.rack_id: location.rack_id,
                InventoryItem.level: location.level,
                InventoryItem.position: location.position
            }, synchronize_session=False)

            if not updated:
                db.rollback()
                existing = db.query(InventoryItem).filter(InventoryItem.lpn == command.lpn).first()
                if existing:
                    raise AssignmentConflict(
                        RejectionCode.LPN_ALREADY_ASSIGNED,
                        f"O LPN {command.lpn} já foi localizado",
                        existing_location=InventoryService.location_of(existing)
                    )
                raise AssignmentConflict(
                    RejectionCode.LPN_UNKNOWN,
                    f"LPN {command.lpn} não encontrado na recepção pendente"
                )

            db.add(Movement(
                lpn=command.lpn,
                type=MovementType.PUTAWAY,
                rack_id=location.rack_id,
                level=location.level,
                position=location.position,
                location_code=location_code
            ))
            db.commit()
        except IntegrityError:
            db.rollback()
            raise AssignmentConflict(
                RejectionCode.SLOT_OCCUPIED,
                f"Localização {location_code or location.rack_id} foi ocupada por outro LPN"
            )

        item = InventoryService.get_item(db, command.lpn)
        db.refresh(item)
        logger.info(
            "LPN %s localizado em rack %d nível %d posição %d",
            command.lpn, location.rack_id, location.level, location.position
        )
        return item

    # --- Saída ---

    @staticmethod
    def dispatch(db: Session, lpns: List[str]) -> Tuple[List[str], List[str]]:
        """Despacha pallets (venda / cross-docking): saem do estoque ativo"""
        return InventoryService._remove_items(db, lpns, MovementType.DISPATCH)

    @staticmethod
    def remove(db: Session, lpns: List[str]) -> Tuple[List[str], List[str]]:
        """Remove registros lançados por engano (correção)"""
        return InventoryService._remove_items(db, lpns, MovementType.REMOVE)

    @staticmethod
    def _remove_items(db: Session, lpns: List[str], movement_type: MovementType):
        # Remover duplicatas mantendo ordem
        unique_lpns = list(dict.fromkeys(value.strip() for value in lpns if value and value.strip()))
        items = db.query(InventoryItem).filter(InventoryItem.lpn.in_(unique_lpns)).all()
        found = {item.lpn: item for item in items}

        processed = []
        try:
            for lpn in unique_lpns:
                item = found.get(lpn)
                if not item:
                    continue
                db.add(Movement(
                    lpn=lpn,
                    type=movement_type,
                    rack_id=item.rack_id,
                    level=item.level,
                    position=item.position,
                    meta_json={"product_code": item.product_code, "quantity": item.quantity}
                ))
                db.delete(item)
                processed.append(lpn)
            db.commit()
        except Exception:
            db.rollback()
            raise

        not_found = [lpn for lpn in unique_lpns if lpn not in found]
        logger.info("%s: %d pallets (%d não encontrados)", movement_type.value, len(processed), len(not_found))
        return processed, not_found

    # --- Fotos ---

    @staticmethod
    def add_photo(db: Session, lpn: str, data_url: str) -> InventoryItem:
        item = InventoryService.get_item(db, lpn)
        photos = list(item.photos or [])
        if len(photos) >= InventoryService.MAX_PHOTOS:
            raise InventoryError(f"Máximo {InventoryService.MAX_PHOTOS} fotos permitidas por pallet")
        photos.append(data_url)
        # JSON precisa de nova lista para o SQLAlchemy detectar a mudança
        item.photos = photos
        db.commit()
        db.refresh(item)
        return item

    @staticmethod
    def delete_photo(db: Session, lpn: str, index: int) -> InventoryItem:
        item = InventoryService.get_item(db, lpn)
        photos = list(item.photos or [])
        if index < 0 or index >= len(photos):
            raise NotFoundError(f"Foto {index} não existe no LPN {lpn}")
        del photos[index]
        item.photos = photos
        db.commit()
        db.refresh(item)
        return item

    # --- Exportação ---

    @staticmethod
    def export_located_csv(db: Session) -> str:
        """CSV do estoque localizado em racks"""
        output = io.StringIO()
        writer = csv.writer(output, lineterminator="\n")
        writer.writerow(EXPORT_HEADERS)
        for item in InventoryService.list_located(db):
            writer.writerow([
                item.lpn,
                "Mixto" if item.kind == PalletKind.MIXED else "Unico",
                item.product_name,
                item.product_code,
                item.quantity,
                item.expiration_date.isoformat(),
                item.reception_date.date().isoformat(),
                item.aisle,
                item.rack_id,
                item.level,
                item.position
            ])
        return output.getvalue()
