from datetime import date, timedelta

import pytest

from models.inventory_item import InventoryItem, PalletKind
from models.movement import Movement, MovementType
from schemas.inventory_schemas import ExpiryStatus
from schemas.location_schemas import AssignmentCommand, RackLocation, RejectionCode
from services.errors import AssignmentConflict, InventoryError, NotFoundError
from services.expiry_service import ExpiryService
from services.inventory_service import InventoryService
from services.putaway_service import PutawayService
from services.snapshots import InventorySnapshot, ItemView
from tests.conftest import LOCATED_LPN, PENDING_LPN, make_item


def test_next_lpn_continues_sequence(warehouse):
    today = date(2025, 11, 26)
    assert InventoryService.next_lpn(warehouse, today) == "25112600000151"
    assert InventoryService.next_lpn(warehouse, today) == "25112600000152"


def test_receive_single_creates_pending_item(warehouse):
    item, warning = InventoryService.receive_single(warehouse, "TEST-001", 20, date(2026, 1, 31))

    assert warning is None
    assert item.is_pending
    assert item.kind == PalletKind.SINGLE
    assert item.product_name == "Producto de Prueba"
    assert item.received_by == InventoryService.DEFAULT_OPERATOR
    assert len(item.lpn) == 14
    assert item.lpn.startswith(date.today().strftime("%y%m%d"))
    assert warehouse.query(Movement).filter(
        Movement.lpn == item.lpn, Movement.type == MovementType.RECEIVE
    ).count() == 1


def test_receive_warns_when_expiration_is_older_than_stock(warehouse):
    _, warning = InventoryService.receive_single(warehouse, "7751234567890", 5, date(2025, 6, 1))
    assert warning is not None
    assert "2025-12-01" in warning


def test_receive_unknown_product(warehouse):
    with pytest.raises(NotFoundError):
        InventoryService.receive_single(warehouse, "NOPE", 1, date(2026, 1, 1))


def test_receive_rejects_zero_quantity(warehouse):
    with pytest.raises(InventoryError):
        InventoryService.receive_single(warehouse, "TEST-001", 0, date(2026, 1, 1))


def test_receive_mixed_pallet(warehouse):
    item, _ = InventoryService.receive_mixed(warehouse, [
        {"product_code": "7751234567890", "quantity": 10, "expiration_date": date(2026, 5, 1)},
        {"product_code": "7756666666666", "quantity": 4, "expiration_date": date(2026, 2, 1)},
    ])

    assert item.kind == PalletKind.MIXED
    assert item.product_code == "MIXED-PALLET"
    assert item.product_name == "PALLET MIXTO (2 Refs)"
    assert item.quantity == 14
    assert item.expiration_date == date(2026, 2, 1)
    assert [m.product_name for m in item.mixed_items] == ["Arroz Extra Costeño 5kg", "Yogurt Fresa 1L"]


def test_receive_mixed_requires_lines(warehouse):
    with pytest.raises(InventoryError):
        InventoryService.receive_mixed(warehouse, [])


def test_snapshot_indexes_occupancy(warehouse):
    snapshot = InventoryService.build_snapshot(warehouse)

    assert len(snapshot) == 2
    assert snapshot.is_pending(PENDING_LPN)
    assert snapshot.occupant(1, 1, 1).lpn == LOCATED_LPN
    assert snapshot.occupant(1, 1, 2) is None


def test_apply_assignment(warehouse):
    location = RackLocation(aisle="A", rack_id=1, level=5, position=1)
    item = InventoryService.apply_assignment(
        warehouse, AssignmentCommand(lpn=PENDING_LPN, location=location), "SE-A-1-5"
    )

    assert InventoryService.location_of(item) == location
    movement = warehouse.query(Movement).filter(Movement.type == MovementType.PUTAWAY).one()
    assert movement.location_code == "SE-A-1-5"


def test_apply_assignment_is_not_repeated(warehouse):
    location = RackLocation(aisle="A", rack_id=1, level=5, position=1)
    with pytest.raises(AssignmentConflict) as exc:
        InventoryService.apply_assignment(warehouse, AssignmentCommand(lpn=LOCATED_LPN, location=location))
    assert exc.value.code == RejectionCode.LPN_ALREADY_ASSIGNED
    assert exc.value.existing_location == RackLocation(aisle="A", rack_id=1, level=1, position=1)


def test_scan_race_reports_existing_location(warehouse, monkeypatch):
    # Fotografia antiga: o LPN ainda parecia pendente quando o resolver decidiu
    stale = InventorySnapshot([ItemView(lpn=LOCATED_LPN)])
    monkeypatch.setattr(InventoryService, "build_snapshot", staticmethod(lambda db: stale))

    outcome = PutawayService.scan(warehouse, LOCATED_LPN, "SE-A-1-5")
    result = outcome["result"]

    assert not outcome["applied"]
    assert result.error == RejectionCode.LPN_ALREADY_ASSIGNED
    assert result.existing_location == RackLocation(aisle="A", rack_id=1, level=1, position=1)
    assert result.command is None


def test_apply_assignment_on_claimed_slot(warehouse):
    warehouse.add(make_item("25112600000027"))
    warehouse.commit()
    location = RackLocation(aisle="A", rack_id=1, level=5, position=1)
    InventoryService.apply_assignment(warehouse, AssignmentCommand(lpn=PENDING_LPN, location=location))

    with pytest.raises(AssignmentConflict) as exc:
        InventoryService.apply_assignment(warehouse, AssignmentCommand(lpn="25112600000027", location=location))

    assert exc.value.code == RejectionCode.SLOT_OCCUPIED
    assert InventoryService.get_item(warehouse, "25112600000027").is_pending


def test_dispatch_removes_items_and_keeps_audit(warehouse):
    processed, not_found = InventoryService.dispatch(warehouse, [LOCATED_LPN, "NOPE", LOCATED_LPN])

    assert processed == [LOCATED_LPN]
    assert not_found == ["NOPE"]
    assert warehouse.query(InventoryItem).filter(InventoryItem.lpn == LOCATED_LPN).count() == 0
    movement = warehouse.query(Movement).filter(Movement.type == MovementType.DISPATCH).one()
    assert (movement.rack_id, movement.level, movement.position) == (1, 1, 1)


def test_remove_pending_items(warehouse):
    processed, _ = InventoryService.remove(warehouse, [PENDING_LPN])
    assert processed == [PENDING_LPN]
    assert InventoryService.list_pending(warehouse) == []


def test_photo_limit(warehouse):
    for i in range(InventoryService.MAX_PHOTOS):
        InventoryService.add_photo(warehouse, PENDING_LPN, f"data:image/png;base64,{i}")
    with pytest.raises(InventoryError):
        InventoryService.add_photo(warehouse, PENDING_LPN, "data:image/png;base64,x")

    item = InventoryService.delete_photo(warehouse, PENDING_LPN, 0)
    assert len(item.photos) == InventoryService.MAX_PHOTOS - 1
    assert item.photos[0] == "data:image/png;base64,1"


def test_expiring_sorted_by_date(warehouse):
    today = date(2025, 11, 20)
    items = InventoryService.expiring(warehouse, 15, today)
    assert [i.lpn for i in items] == [LOCATED_LPN]

    items = InventoryService.expiring(warehouse, 60, today)
    assert [i.lpn for i in items] == [LOCATED_LPN, PENDING_LPN]


@pytest.mark.parametrize("days,status", [
    (-3, ExpiryStatus.CRITICAL),
    (5, ExpiryStatus.CRITICAL),
    (6, ExpiryStatus.WARNING),
    (30, ExpiryStatus.WARNING),
    (31, ExpiryStatus.OK),
])
def test_expiry_classification(days, status):
    today = date(2025, 1, 1)
    assert ExpiryService.classify(today + timedelta(days=days), today) == status


def test_export_only_located_stock(warehouse):
    lines = InventoryService.export_located_csv(warehouse).splitlines()

    assert lines[0] == "LPN,Tipo,Producto,SKU,Cantidad,Vencimiento,Fecha Recepcion,Pasillo,Rack,Nivel,Posicion"
    assert len(lines) == 2
    assert lines[1].startswith(f"{LOCATED_LPN},Unico,")
    assert lines[1].endswith(",A,1,1,1")
