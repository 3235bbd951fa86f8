"""Filters, KPIs and data-quality counts over normalized plant records."""

from __future__ import annotations

from collections import Counter
from dataclasses import asdict, dataclass, field
from typing import Iterable

from mexgen.common.geography import within_bbox
from mexgen.common.models import EnergyCategory, PlantRecord, Sector


@dataclass(frozen=True)
class PlantFilters:
    """Selection criteria; an empty collection or ``None`` bound does not filter."""

    categories: frozenset[EnergyCategory] = field(default_factory=frozenset)
    subcategories: frozenset[str] = field(default_factory=frozenset)
    states: frozenset[str] = field(default_factory=frozenset)
    sectors: frozenset[Sector] = field(default_factory=frozenset)
    owners: frozenset[str] = field(default_factory=frozenset)
    power_min: float | None = None
    power_max: float | None = None


@dataclass(frozen=True)
class Kpis:
    total_power_mw: float
    total_plants: int
    public_pct: float
    private_pct: float
    unique_owners: int
    incomplete_records: int

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class DataQuality:
    valid: int
    missing_coordinates: int
    missing_owner: int
    missing_power: int
    undetermined_sector: int
    duplicate_ids: int

    def to_dict(self) -> dict:
        return asdict(self)


def _matches(record: PlantRecord, filters: PlantFilters) -> bool:
    if filters.categories and record.energy_category not in filters.categories:
        return False
    if filters.subcategories and record.energy_subcategory not in filters.subcategories:
        return False
    if filters.states and record.state not in filters.states:
        return False
    if filters.sectors and record.sector not in filters.sectors:
        return False
    if filters.owners and record.owner not in filters.owners:
        return False
    if filters.power_min is not None and (record.power_mw is None or record.power_mw < filters.power_min):
        return False
    if filters.power_max is not None and (record.power_mw is None or record.power_mw > filters.power_max):
        return False
    return True


def filter_plants(plants: Iterable[PlantRecord], filters: PlantFilters) -> list[PlantRecord]:
    return [record for record in plants if _matches(record, filters)]


def _power(record: PlantRecord) -> float:
    return record.power_mw or 0.0


def _is_incomplete(record: PlantRecord) -> bool:
    # Zero capacity counts as missing.
    return (
        not record.power_mw
        or not record.has_coordinates
        or not record.owner
        or record.sector is Sector.UNDETERMINED
    )


def _pct(part: int, total: int) -> float:
    if total == 0:
        return 0.0
    return round(part / total * 100, 1)


def compute_kpis(plants: Iterable[PlantRecord]) -> Kpis:
    records = list(plants)
    total = len(records)
    public = sum(1 for record in records if record.sector is Sector.PUBLIC)
    private = sum(1 for record in records if record.sector is Sector.PRIVATE)
    return Kpis(
        total_power_mw=round(sum(_power(record) for record in records), 2),
        total_plants=total,
        public_pct=_pct(public, total),
        private_pct=_pct(private, total),
        unique_owners=len({record.owner for record in records if record.owner}),
        incomplete_records=sum(1 for record in records if _is_incomplete(record)),
    )


def compute_quality(plants: Iterable[PlantRecord]) -> DataQuality:
    records = list(plants)
    ids = [record.id for record in records]
    return DataQuality(
        valid=sum(1 for record in records if not _is_incomplete(record)),
        missing_coordinates=sum(1 for record in records if not record.has_coordinates),
        missing_owner=sum(1 for record in records if not record.owner),
        missing_power=sum(1 for record in records if not record.power_mw),
        undetermined_sector=sum(1 for record in records if record.sector is Sector.UNDETERMINED),
        duplicate_ids=len(ids) - len(set(ids)),
    )


def top_owners_by_power(plants: Iterable[PlantRecord], n: int = 10) -> list[dict]:
    totals: dict[str, float] = {}
    for record in plants:
        if record.owner:
            totals[record.owner] = totals.get(record.owner, 0.0) + _power(record)
    ranked = sorted(totals.items(), key=lambda item: -item[1])
    return [{"owner": owner, "mw": round(mw, 2)} for owner, mw in ranked[:n]]


def top_owners_by_count(plants: Iterable[PlantRecord], n: int = 10) -> list[dict]:
    counts = Counter(record.owner for record in plants if record.owner)
    ranked = sorted(counts.items(), key=lambda item: -item[1])
    return [{"owner": owner, "count": count} for owner, count in ranked[:n]]


def power_by_state(plants: Iterable[PlantRecord]) -> list[dict]:
    totals: dict[str, dict] = {}
    for record in plants:
        if not record.state:
            continue
        entry = totals.setdefault(record.state, {"state": record.state, "mw": 0.0, "count": 0})
        entry["mw"] += _power(record)
        entry["count"] += 1
    return sorted(totals.values(), key=lambda entry: -entry["mw"])


def power_by_category(plants: Iterable[PlantRecord]) -> list[dict]:
    totals: dict[EnergyCategory, dict] = {}
    for record in plants:
        entry = totals.setdefault(
            record.energy_category,
            {"category": record.energy_category.value, "mw": 0.0, "count": 0},
        )
        entry["mw"] += _power(record)
        entry["count"] += 1
    return sorted(totals.values(), key=lambda entry: -entry["mw"])


def count_outside_bbox(plants: Iterable[PlantRecord], bbox: dict) -> int:
    """Count located records falling outside ``bbox``; unlocated ones are ignored."""
    return sum(
        1
        for record in plants
        if record.has_coordinates and not within_bbox(record.latitude, record.longitude, bbox)
    )
