import os

os.environ.setdefault("DATABASE_URL", "sqlite://")

from datetime import date, datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from main import app
from models.database import Base, get_db
from models.inventory_item import InventoryItem, PalletKind
from models.product import Product
from models.zone import ZoneCategory
from services.topology_service import TopologyService

PENDING_LPN = "25112600000026"
LOCATED_LPN = "24112600000001"


@pytest.fixture()
def session_factory():
    """Banco SQLite em memória isolado por teste"""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


def make_item(lpn, product_code="TEST-001", expiration=date(2025, 12, 31), location=None, quantity=10):
    item = InventoryItem(
        lpn=lpn,
        kind=PalletKind.SINGLE,
        product_code=product_code,
        product_name=f"Produto {product_code}",
        quantity=quantity,
        expiration_date=expiration,
        reception_date=datetime(2025, 11, 26, 10, 0),
        received_by="Tester",
        photos=[],
    )
    if location:
        item.aisle, item.rack_id, item.level, item.position = location
    return item


def seed_warehouse(db):
    """
    - zone-1 Cámara Seca A (DRY): rack 1 no corredor A, rack 2 no D, rack 3 no B (6x9)
    - zone-2 Cámara Refrigerada (COLD): rack 4 no corredor C (5x8)
    - LPN pendente 25112600000026 e LPN localizado em A1-1-1
    """
    TopologyService.add_zone(db, "Cámara Seca A", ZoneCategory.DRY, zone_id="zone-1")
    TopologyService.add_zone(db, "Cámara Refrigerada", ZoneCategory.COLD, zone_id="zone-2")
    TopologyService.add_rack(db, "zone-1", "A", 6, 9)
    TopologyService.add_rack(db, "zone-1", "D", 6, 9)
    TopologyService.add_rack(db, "zone-1", "B", 6, 9)
    TopologyService.add_rack(db, "zone-2", "C", 5, 8)

    db.add_all([
        Product(code="TEST-001", name="Producto de Prueba", category="Pruebas"),
        Product(code="7751234567890", name="Arroz Extra Costeño 5kg", category="Granos",
                default_zone_category=ZoneCategory.DRY),
        Product(code="7756666666666", name="Yogurt Fresa 1L", category="Lácteos",
                default_zone_category=ZoneCategory.COLD),
    ])
    db.add(make_item(PENDING_LPN))
    db.add(make_item(LOCATED_LPN, product_code="7751234567890",
                     expiration=date(2025, 12, 1), location=("A", 1, 1, 1)))
    db.commit()


@pytest.fixture()
def warehouse(db):
    seed_warehouse(db)
    return db


@pytest.fixture()
def client(session_factory):
    seed = session_factory()
    try:
        seed_warehouse(seed)
    finally:
        seed.close()

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
