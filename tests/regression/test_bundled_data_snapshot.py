from pathlib import Path

import pytest

from mexgen.common.config_loader import load_config
from mexgen.common.models import EnergyCategory, Sector
from mexgen.pipeline.ingest import run_ingestion


@pytest.mark.regression
def test_bundled_csv_snapshot():
    records = {record.name: record for record in run_ingestion(config=load_config(Path("config"))).records}

    assert records["Laguna Verde"].energy_category is EnergyCategory.NUCLEAR
    assert records["Laguna Verde"].power_mw == 1608.0
    assert records["Laguna Verde"].latitude == pytest.approx(19.72, abs=0.01)
    assert records["Tuxpan"].energy_subcategory == "thermoelectric (fuel oil)"
    assert records["Cerro Prieto"].energy_category is EnergyCategory.GEOTHERMAL
    assert records['Parque Eólico "La Venta"'].power_mw == 103.0
    assert records['Parque Eólico "La Venta"'].sector is Sector.PRIVATE
    assert records["Dulces Nombres"].power_mw == 1308.0
    assert records["Dulces Nombres"].energy_subcategory == "combined cycle (natural gas)"
    assert records["Ingenio El Mante"].energy_subcategory == "biomass (bagasse)"
    assert records["Ingenio El Mante"].power_mw is None
    assert records["Mexicali"].sector is Sector.UNDETERMINED
    assert records["Mexicali"].owner == "Sempra Infraestructura"
    assert not records["Reynosa Solar"].has_coordinates
    assert records["Reynosa Solar"].operator == ""
