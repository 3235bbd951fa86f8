"""Canonical plant export."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Iterable

from mexgen.common.fs import write_csv, write_json
from mexgen.common.models import PlantRecord


CANONICAL_HEADERS = [
    "id",
    "name",
    "operator",
    "owner",
    "sector",
    "power_mw",
    "raw_fuel",
    "raw_method",
    "energy_category",
    "energy_subcategory",
    "latitude",
    "longitude",
    "state",
    "municipality",
    "external_id",
    "source_origin",
]


def _serialize_row(record: PlantRecord) -> dict:
    out = {}
    for key in CANONICAL_HEADERS:
        value = getattr(record, key)
        if value is None:
            out[key] = ""
        elif isinstance(value, Enum):
            out[key] = value.value
        else:
            out[key] = value
    return out


def write_plants_csv(path: Path, records: Iterable[PlantRecord]) -> Path:
    write_csv(path, CANONICAL_HEADERS, [_serialize_row(record) for record in records])
    return path


def write_plants_json(path: Path, records: Iterable[PlantRecord]) -> Path:
    write_json(path, [record.to_dict() for record in records])
    return path
