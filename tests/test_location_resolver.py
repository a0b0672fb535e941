import pytest

from models.zone import ZoneCategory
from schemas.location_schemas import RackLocation, RejectionCode
from services.codecs import format_location_code
from services.location_resolver import resolve_assignment
from services.snapshots import InventorySnapshot, ItemView, RackView, TopologySnapshot, ZoneView

PENDING = "25112600000026"


def topology(blocked=frozenset()):
    return TopologySnapshot(
        zones=[
            ZoneView(id="zone-1", name="Cámara Seca A", category=ZoneCategory.DRY),
            ZoneView(id="zone-2", name="Cámara Refrigerada", category=ZoneCategory.COLD),
        ],
        racks=[
            RackView(id=2, zone_id="zone-1", aisle="D", levels=6, positions_per_level=9),
            RackView(id=1, zone_id="zone-1", aisle="A", levels=6, positions_per_level=9, blocked=blocked),
            RackView(id=4, zone_id="zone-2", aisle="C", levels=5, positions_per_level=8),
        ],
    )


def inventory(*items):
    return InventorySnapshot([ItemView(lpn=PENDING)] + list(items))


def test_assigns_pending_lpn_to_free_slot():
    result = resolve_assignment(topology(), inventory(), "SE-A-1-5", PENDING)

    assert result.success
    assert result.error is None
    assert result.command.lpn == PENDING
    assert result.command.location == RackLocation(aisle="A", rack_id=1, level=5, position=1)


def test_lowercase_code_is_accepted():
    lower = resolve_assignment(topology(), inventory(), " se-a-1-5", PENDING)
    upper = resolve_assignment(topology(), inventory(), "SE-A-1-5", PENDING)

    assert lower.success
    assert lower.command == upper.command
    assert lower.location_code == "SE-A-1-5"


def test_malformed_code():
    result = resolve_assignment(topology(), inventory(), "SE-A-1", PENDING)
    assert not result.success
    assert result.error == RejectionCode.MALFORMED_LOCATION_CODE
    assert result.command is None


def test_unknown_zone_code():
    result = resolve_assignment(topology(), inventory(), "XX-A-1-5", PENDING)
    assert result.error == RejectionCode.UNKNOWN_ZONE_CODE


def test_known_code_without_configured_zone():
    result = resolve_assignment(topology(), inventory(), "CG-A-1-5", PENDING)
    assert result.error == RejectionCode.UNKNOWN_ZONE_CODE


def test_aisle_from_another_zone_is_not_found():
    result = resolve_assignment(topology(), inventory(), "RF-A-1-5", PENDING)
    assert result.error == RejectionCode.RACK_NOT_FOUND


@pytest.mark.parametrize("code", ["SE-A-0-1", "SE-A-10-1", "SE-A-1-7", "SE-A-1-0"])
def test_slot_outside_rack(code):
    result = resolve_assignment(topology(), inventory(), code, PENDING)
    assert result.error == RejectionCode.SLOT_OUT_OF_RANGE


def test_blocked_slot_wins_over_occupancy():
    occupant = ItemView(lpn="24112600000001", location=RackLocation(aisle="A", rack_id=1, level=5, position=1))
    result = resolve_assignment(topology(blocked=frozenset({(5, 1)})), inventory(occupant), "SE-A-1-5", PENDING)
    assert result.error == RejectionCode.SLOT_BLOCKED
    assert result.command is None


def test_occupied_slot():
    occupant = ItemView(lpn="24112600000001", location=RackLocation(aisle="A", rack_id=1, level=5, position=1))
    result = resolve_assignment(topology(), inventory(occupant), "SE-A-1-5", PENDING)
    assert result.error == RejectionCode.SLOT_OCCUPIED
    assert "24112600000001" in result.message


def test_occupancy_is_per_rack():
    # Mesmo nível e posição no rack 2 (corredor D) não ocupam o slot do rack 1
    occupant = ItemView(lpn="24112600000001", location=RackLocation(aisle="D", rack_id=2, level=5, position=1))
    result = resolve_assignment(topology(), inventory(occupant), "SE-A-1-5", PENDING)
    assert result.success
    assert result.command.location.rack_id == 1


def test_unknown_lpn():
    result = resolve_assignment(topology(), inventory(), "SE-A-1-5", "99999999999999")
    assert result.error == RejectionCode.LPN_UNKNOWN
    assert result.command is None


def test_lpn_already_assigned_reports_existing_location():
    existing = RackLocation(aisle="C", rack_id=4, level=2, position=3)
    located = ItemView(lpn="24112600000001", location=existing)
    result = resolve_assignment(topology(), inventory(located), "SE-A-1-5", "24112600000001")

    assert result.error == RejectionCode.LPN_ALREADY_ASSIGNED
    assert result.existing_location == existing
    assert result.command is None


def test_location_checks_run_before_lpn_check():
    result = resolve_assignment(topology(), inventory(), "RF-A-1-5", "99999999999999")
    assert result.error == RejectionCode.RACK_NOT_FOUND


def test_snapshots_are_not_mutated():
    inv = inventory()
    resolve_assignment(topology(), inv, "SE-A-1-5", PENDING)
    assert inv.is_pending(PENDING)
    assert inv.occupant(1, 5, 1) is None


def all_slots(rack):
    for level in range(1, rack.levels + 1):
        for position in range(1, rack.positions_per_level + 1):
            yield level, position


def test_every_slot_code_resolves_to_the_same_slot():
    topo = topology()
    for rack in topo.racks:
        category = topo.zone_of(rack).category
        for level, position in all_slots(rack):
            code = format_location_code(category, rack.aisle, level, position)
            result = resolve_assignment(topo, inventory(), code, PENDING)
            assert result.success, code
            assert result.command.location == RackLocation(
                aisle=rack.aisle, rack_id=rack.id, level=level, position=position
            )


def test_every_occupied_slot_is_rejected():
    topo = topology()
    rack = next(r for r in topo.racks if r.id == 1)
    occupants = [
        ItemView(lpn=f"2411260000{i:04d}", location=RackLocation(aisle="A", rack_id=1, level=level, position=position))
        for i, (level, position) in enumerate(all_slots(rack))
    ]
    inv = inventory(*occupants)

    for occupant in occupants:
        loc = occupant.location
        code = format_location_code(ZoneCategory.DRY, "A", loc.level, loc.position)
        result = resolve_assignment(topo, inv, code, PENDING)
        assert result.error == RejectionCode.SLOT_OCCUPIED, code
        assert occupant.lpn in result.message
        assert result.command is None


@pytest.mark.parametrize("occupied", [False, True])
def test_every_blocked_slot_is_rejected_regardless_of_occupancy(occupied):
    rack = RackView(id=1, zone_id="zone-1", aisle="A", levels=6, positions_per_level=9)
    every_slot = frozenset(all_slots(rack))
    topo = topology(blocked=every_slot)
    occupants = [
        ItemView(lpn=f"2411260000{i:04d}", location=RackLocation(aisle="A", rack_id=1, level=level, position=position))
        for i, (level, position) in enumerate(sorted(every_slot))
    ] if occupied else []
    inv = inventory(*occupants)

    for level, position in every_slot:
        code = format_location_code(ZoneCategory.DRY, "A", level, position)
        result = resolve_assignment(topo, inv, code, PENDING)
        assert result.error == RejectionCode.SLOT_BLOCKED, code
        assert result.command is None
