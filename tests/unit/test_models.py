import math

import pytest

from mexgen.common.errors import ContractError
from mexgen.common.models import EnergyCategory, PlantRecord, Sector, SourceOrigin


def _record(**overrides) -> PlantRecord:
    values = dict(
        id="csv-1",
        name="Planta",
        operator="CFE",
        owner="CFE",
        sector=Sector.PUBLIC,
        power_mw=10.0,
        raw_fuel="Gas Natural",
        raw_method="Ciclo Combinado",
        energy_category=EnergyCategory.THERMAL,
        energy_subcategory="combined cycle (natural gas)",
        latitude=19.0,
        longitude=-96.0,
        state="Veracruz",
        municipality="",
        external_id="",
        source_origin=SourceOrigin.CSV_UPLOAD,
    )
    values.update(overrides)
    return PlantRecord(**values)


def test_to_dict_uses_enum_values():
    payload = _record().to_dict()
    assert payload["sector"] == "public"
    assert payload["energy_category"] == "thermal"
    assert payload["source_origin"] == "csv_upload"
    assert payload["power_mw"] == 10.0


@pytest.mark.parametrize(
    "overrides",
    [
        {"id": ""},
        {"name": ""},
        {"sector": "public"},
        {"energy_category": "thermal"},
        {"power_mw": -1.0},
        {"power_mw": math.nan},
        {"latitude": None},
        {"latitude": 91.0},
        {"longitude": -181.0},
    ],
)
def test_invariants(overrides):
    with pytest.raises(ContractError):
        _record(**overrides)


def test_unlocated_record():
    record = _record(latitude=None, longitude=None, power_mw=None)
    assert not record.has_coordinates
    assert record.power_mw is None
