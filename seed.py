"""
Script para popular o banco de dados com a configuração inicial:
- Cámara Seca A (DRY): rack 1 no corredor A, rack 2 no D e rack 3 no B (6 níveis × 9 posições)
- Cámara Refrigerada (COLD): rack 4 no corredor C (5 níveis × 8 posições)
- Catálogo de produtos
- Inventário de demonstração (itens localizados, pendentes e próximos do vencimento)
"""
from datetime import date, datetime, timedelta
from sqlalchemy.orm import Session
from models.database import SessionLocal, engine, Base
from models.zone import Zone, ZoneCategory
from models.product import Product
from models.inventory_item import InventoryItem, PalletKind
from models.sequence import Sequence
from services.codecs import generate_lpn
from services.inventory_service import LPN_SEQUENCE_NAME
from services.topology_service import TopologyService

ZONES = [
    ("zone-1", "Cámara Seca A", ZoneCategory.DRY),
    ("zone-2", "Cámara Refrigerada", ZoneCategory.COLD),
]

RACKS = [
    ("zone-1", "A", 6, 9),
    ("zone-1", "D", 6, 9),
    ("zone-1", "B", 6, 9),
    ("zone-2", "C", 5, 8),
]

CATALOG = [
    ("7751234567890", "Arroz Extra Costeño 5kg", "Granos", ZoneCategory.DRY),
    ("7759876543210", "Leche Gloria Azul 400g", "Lácteos", ZoneCategory.DRY),
    ("7755555555555", "Filete Atún Florida", "Conservas", ZoneCategory.DRY),
    ("7751111111111", "Aceite Primor Premium 1L", "Aceites", ZoneCategory.DRY),
    ("7752222222222", "Fideos Don Vittorio Spaghetti", "Pastas", ZoneCategory.DRY),
    ("7753333333333", "Galleta Soda San Jorge Pqt", "Snacks", ZoneCategory.DRY),
    ("7756666666666", "Yogurt Fresa 1L", "Lácteos", ZoneCategory.COLD),
    ("7757777777777", "Mantequilla Laive 200g", "Lácteos", ZoneCategory.COLD),
    ("7758888888888", "Hamburguesa San Fernando", "Congelados", ZoneCategory.FROZEN),
    ("7759999999999", "Helado D'Onofrio Tricolor", "Congelados", ZoneCategory.FROZEN),
    ("TEST-001", "Producto de Prueba", "Pruebas", None),
]

DEMO_ITEMS = 50
DEMO_LOCATED = 30
SEQUENCE_AFTER_SEED = 150


def _item(lpn, code, name, quantity, expiration, received_by, location=None):
    item = InventoryItem(
        lpn=lpn,
        kind=PalletKind.SINGLE,
        product_code=code,
        product_name=name,
        quantity=quantity,
        expiration_date=expiration,
        reception_date=datetime.now(),
        received_by=received_by,
        photos=[]
    )
    if location:
        item.aisle, item.rack_id, item.level, item.position = location
    return item


def seed_database():
    """Popula o banco com a configuração inicial"""
    # Criar todas as tabelas
    Base.metadata.create_all(bind=engine)

    db: Session = SessionLocal()
    try:
        # Verificar se já existe dados
        if db.query(Zone).count() > 0:
            print("Banco já possui dados. Use --force para recriar.")
            return

        for zone_id, name, category in ZONES:
            TopologyService.add_zone(db, name, category, zone_id=zone_id)

        racks = [TopologyService.add_rack(db, *rack_args) for rack_args in RACKS]

        for code, name, category, zone_category in CATALOG:
            db.add(Product(code=code, name=name, category=category, default_zone_category=zone_category))

        # Slots livres do rack 1 em ordem (nível, posição)
        rack = racks[0]
        free_slots = [
            (rack.aisle, rack.id, level, position)
            for level in range(1, rack.levels + 1)
            for position in range(1, rack.positions_per_level + 1)
        ]

        arroz = CATALOG[0]
        db.add(_item("24112600000001", arroz[0], arroz[1], 50, date(2025, 12, 1), "Operador 01", free_slots.pop(0)))
        db.add(_item("24112600000002", arroz[0], arroz[1], 50, date(2025, 12, 1), "Operador 01", free_slots.pop(0)))
        db.add(_item("25112600000026", "TEST-001", "Producto de Prueba", 100, date(2025, 12, 31), "Tester"))

        # Itens de demonstração: a cada 10, um vence em poucos dias
        today = date.today()
        for i in range(DEMO_ITEMS):
            code, name, _, _ = CATALOG[i % 10]
            days = (i // 10) % 5 if i % 10 == 0 else 30 + (i * 7) % 300
            location = free_slots.pop(0) if i < DEMO_LOCATED else None
            db.add(_item(
                generate_lpn(100 + i, today), code, name, 1 + (i * 13) % 100,
                today + timedelta(days=days), "System", location
            ))

        db.add(Sequence(name=LPN_SEQUENCE_NAME, value=SEQUENCE_AFTER_SEED))
        db.commit()
        print("✅ Seed concluído!")
        print(f"   - {len(ZONES)} câmaras criadas")
        print(f"   - {len(racks)} racks criados")
        print(f"   - {len(CATALOG)} produtos no catálogo")
        print(f"   - {DEMO_ITEMS + 3} pallets de demonstração")

    except Exception as e:
        db.rollback()
        print(f"❌ Erro ao fazer seed: {e}")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    import sys
    if "--force" in sys.argv:
        # Deletar tudo e recriar
        Base.metadata.drop_all(bind=engine)
        Base.metadata.create_all(bind=engine)
        print("⚠️  Banco recriado do zero")

    seed_database()
