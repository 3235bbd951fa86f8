"""Data models used across the pipeline."""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any

from mexgen.common.errors import ContractError


class EnergyCategory(str, Enum):
    SOLAR = "solar"
    WIND = "wind"
    HYDRO = "hydro"
    THERMAL = "thermal"
    NUCLEAR = "nuclear"
    GEOTHERMAL = "geothermal"
    BIOENERGY = "bioenergy"
    OTHER = "other"


class Sector(str, Enum):
    PUBLIC = "public"
    PRIVATE = "private"
    UNDETERMINED = "undetermined"


class SourceOrigin(str, Enum):
    CSV_UPLOAD = "csv_upload"
    CSV_DEFAULT = "csv_default"
    CATALOG = "catalog"


@dataclass(frozen=True)
class Coordinate:
    lat: float
    lon: float


@dataclass(frozen=True)
class PlantRecord:
    """One normalized power-generation facility.

    Records are immutable; filters and aggregations build new collections.
    """

    id: str
    name: str
    operator: str
    owner: str
    sector: Sector
    power_mw: float | None
    raw_fuel: str
    raw_method: str
    energy_category: EnergyCategory
    energy_subcategory: str
    latitude: float | None
    longitude: float | None
    state: str
    municipality: str
    external_id: str
    source_origin: SourceOrigin

    def __post_init__(self) -> None:
        if not self.id:
            raise ContractError("Plant record without id")
        if not self.name:
            raise ContractError(f"Plant record {self.id} without name")
        if not isinstance(self.energy_category, EnergyCategory):
            raise ContractError(f"Plant record {self.id} has invalid category: {self.energy_category!r}")
        if not isinstance(self.sector, Sector):
            raise ContractError(f"Plant record {self.id} has invalid sector: {self.sector!r}")
        if self.power_mw is not None and (not math.isfinite(self.power_mw) or self.power_mw < 0):
            raise ContractError(f"Plant record {self.id} has invalid power: {self.power_mw!r}")
        if (self.latitude is None) != (self.longitude is None):
            raise ContractError(f"Plant record {self.id} is half-located")
        if self.latitude is not None and not (-90 <= self.latitude <= 90 and -180 <= self.longitude <= 180):
            raise ContractError(f"Plant record {self.id} is out of range: {self.latitude}, {self.longitude}")

    @property
    def has_coordinates(self) -> bool:
        return self.latitude is not None

    def to_dict(self) -> dict[str, Any]:
        payload = asdict(self)
        payload["sector"] = self.sector.value
        payload["energy_category"] = self.energy_category.value
        payload["source_origin"] = self.source_origin.value
        return payload
