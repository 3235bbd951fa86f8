"""Construction of canonical plant records from CSV rows and catalog entries."""

from __future__ import annotations

from dataclasses import dataclass

from mexgen.classify.energy import classify_source, classify_technology
from mexgen.classify.ownership import ClassificationStrategy, FieldSectorStrategy, PatternSectorStrategy
from mexgen.common.constants import CATALOG_NAME_PLACEHOLDER, CSV_MIN_COLUMNS
from mexgen.common.geography import state_centroid
from mexgen.common.models import Coordinate, PlantRecord, SourceOrigin
from mexgen.parsing.coordinates import WGS84_EPSG, reproject
from mexgen.parsing.numeric import parse_numeric

# Positional layout of the plant export (centrales.csv).
COL_NAME = 0
COL_OPERATOR = 1
COL_TECHNOLOGY = 2
COL_PHASE = 3
COL_FUEL = 4
COL_PARENT_COMPANY = 5
COL_SECTOR = 6
COL_CAPACITY = 8
COL_STATE = 12
COL_X = 17
COL_Y = 18


@dataclass(frozen=True)
class CatalogEntry:
    """A hardcoded plant with typed values, as listed in the fallback catalog."""

    key: str
    name: str
    operator: str
    power_mw: float | None
    source: str
    method: str
    external_id: str
    lat: float | None
    lon: float | None
    state: str
    municipality: str = ""


def _field(row: list[str], index: int) -> str:
    if index >= len(row):
        return ""
    return (row[index] or "").strip()


def _power(value) -> float | None:
    power = parse_numeric(value)
    if power is None or power < 0:
        return None
    return power


def _row_location(row: list[str], header_width: int | None) -> Coordinate | None:
    location = reproject(_field(row, COL_X), _field(row, COL_Y))
    if location is None and header_width is not None and len(row) == header_width + 1:
        # A single stray field shifts the pair one column right.
        location = reproject(row[-2], row[-1])
    return location


def build_from_csv_row(
    row: list[str],
    index: int,
    *,
    strategy: ClassificationStrategy | None = None,
    origin: SourceOrigin = SourceOrigin.CSV_UPLOAD,
    header_width: int | None = None,
) -> PlantRecord | None:
    """Build a record from one tokenized data row; ``None`` rejects the row.

    ``index`` is the 1-based position of the row after the header. When
    ``header_width`` is given and the row is exactly one field wider, x/y are
    also looked for in the last two fields.
    """
    if not row or len(row) < CSV_MIN_COLUMNS:
        return None

    name = _field(row, COL_NAME)
    if not name:
        return None

    operator = _field(row, COL_OPERATOR)
    technology = _field(row, COL_TECHNOLOGY)
    fuel = _field(row, COL_FUEL)
    parent_company = _field(row, COL_PARENT_COMPANY)
    sector_field = _field(row, COL_SECTOR)

    energy = classify_technology(technology, fuel)
    sector = (strategy or FieldSectorStrategy()).classify(operator, parent_company, sector_field)
    location = _row_location(row, header_width)

    return PlantRecord(
        id=f"csv-{index}",
        name=name,
        operator=operator,
        owner=parent_company or operator,
        sector=sector,
        power_mw=_power(_field(row, COL_CAPACITY)),
        raw_fuel=fuel,
        raw_method=technology,
        energy_category=energy.category,
        energy_subcategory=energy.subcategory,
        latitude=location.lat if location else None,
        longitude=location.lon if location else None,
        state=_field(row, COL_STATE),
        municipality="",
        external_id="",
        source_origin=origin,
    )


def build_from_catalog(
    entry: CatalogEntry,
    *,
    strategy: ClassificationStrategy | None = None,
    fill_centroids: bool = False,
) -> PlantRecord:
    operator = (entry.operator or "").strip()
    energy = classify_source(entry.source, entry.method)
    # The catalog lists operators only, so the operator doubles as owner.
    sector = (strategy or PatternSectorStrategy()).classify(operator, operator)

    location = reproject(entry.lon, entry.lat, source_epsg=WGS84_EPSG)
    if location is None and fill_centroids:
        location = state_centroid(entry.state)

    return PlantRecord(
        id=entry.key,
        name=(entry.name or "").strip() or CATALOG_NAME_PLACEHOLDER,
        operator=operator,
        owner=operator,
        sector=sector,
        power_mw=_power(entry.power_mw),
        raw_fuel=entry.source or "",
        raw_method=entry.method or "",
        energy_category=energy.category,
        energy_subcategory=energy.subcategory,
        latitude=location.lat if location else None,
        longitude=location.lon if location else None,
        state=entry.state or "",
        municipality=entry.municipality or "",
        external_id=entry.external_id or "",
        source_origin=SourceOrigin.CATALOG,
    )
