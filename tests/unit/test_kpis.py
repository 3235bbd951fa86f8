import pytest

from mexgen.common.geography import MEXICO_BBOX_WGS84
from mexgen.common.models import EnergyCategory, PlantRecord, Sector, SourceOrigin
from mexgen.pipeline.kpis import (
    PlantFilters,
    compute_kpis,
    compute_quality,
    count_outside_bbox,
    filter_plants,
    power_by_category,
    power_by_state,
    top_owners_by_count,
    top_owners_by_power,
)


def _plant(id, owner, sector, power, category=EnergyCategory.THERMAL, state="Veracruz", lat=19.0, lon=-96.0):
    return PlantRecord(
        id=id,
        name=f"Planta {id}",
        operator=owner,
        owner=owner,
        sector=sector,
        power_mw=power,
        raw_fuel="",
        raw_method="",
        energy_category=category,
        energy_subcategory=category.value,
        latitude=lat,
        longitude=None if lat is None else lon,
        state=state,
        municipality="",
        external_id="",
        source_origin=SourceOrigin.CATALOG,
    )


PLANTS = [
    _plant("a", "CFE", Sector.PUBLIC, 1000.0),
    _plant("b", "CFE", Sector.PUBLIC, 500.5, category=EnergyCategory.HYDRO, state="Chiapas"),
    _plant("c", "Iberdrola", Sector.PRIVATE, 1200.0, state="Nuevo León"),
    _plant("d", "", Sector.UNDETERMINED, None, category=EnergyCategory.SOLAR, state="", lat=None),
    _plant("e", "Zuma", Sector.PRIVATE, 0.0, category=EnergyCategory.SOLAR, state="Aguascalientes"),
]


def test_compute_kpis():
    kpis = compute_kpis(PLANTS)
    assert kpis.total_power_mw == 2700.5
    assert kpis.total_plants == 5
    assert kpis.public_pct == 40.0
    assert kpis.private_pct == 40.0
    assert kpis.unique_owners == 3
    assert kpis.incomplete_records == 2


def test_compute_kpis_empty():
    kpis = compute_kpis([])
    assert kpis.total_plants == 0
    assert kpis.public_pct == 0.0
    assert kpis.total_power_mw == 0


def test_compute_quality_counts_zero_power_as_missing():
    quality = compute_quality(PLANTS + [PLANTS[0]])
    assert quality.valid == 4
    assert quality.missing_coordinates == 1
    assert quality.missing_owner == 1
    assert quality.missing_power == 2
    assert quality.undetermined_sector == 1
    assert quality.duplicate_ids == 1


def test_filter_plants_empty_criteria_keep_everything():
    assert filter_plants(PLANTS, PlantFilters()) == PLANTS


def test_filter_plants_combines_criteria():
    filters = PlantFilters(sectors=frozenset({Sector.PUBLIC}), categories=frozenset({EnergyCategory.THERMAL}))
    assert [p.id for p in filter_plants(PLANTS, filters)] == ["a"]


def test_power_bounds_exclude_absent_power():
    assert [p.id for p in filter_plants(PLANTS, PlantFilters(power_min=0))] == ["a", "b", "c", "e"]
    assert [p.id for p in filter_plants(PLANTS, PlantFilters(power_max=600))] == ["b", "e"]


def test_top_owners():
    assert top_owners_by_power(PLANTS) == [
        {"owner": "CFE", "mw": 1500.5},
        {"owner": "Iberdrola", "mw": 1200.0},
        {"owner": "Zuma", "mw": 0.0},
    ]
    assert top_owners_by_count(PLANTS, n=1) == [{"owner": "CFE", "count": 2}]


def test_power_by_state_skips_blank_state():
    states = power_by_state(PLANTS)
    assert [entry["state"] for entry in states] == ["Nuevo León", "Veracruz", "Chiapas", "Aguascalientes"]
    assert states[0] == {"state": "Nuevo León", "mw": 1200.0, "count": 1}


def test_power_by_category():
    categories = {entry["category"]: entry for entry in power_by_category(PLANTS)}
    assert categories["thermal"]["mw"] == pytest.approx(2200.0)
    assert categories["solar"]["count"] == 2


def test_count_outside_bbox():
    far = _plant("z", "CFE", Sector.PUBLIC, 1.0, lat=40.0, lon=-100.0)
    assert count_outside_bbox(PLANTS + [far], MEXICO_BBOX_WGS84) == 1
