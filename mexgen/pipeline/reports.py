"""Ingestion report aggregation."""

from __future__ import annotations

from pathlib import Path

from mexgen.common.fs import write_json
from mexgen.pipeline.ingest import IngestionResult
from mexgen.pipeline.kpis import (
    compute_kpis,
    compute_quality,
    count_outside_bbox,
    power_by_category,
    top_owners_by_power,
)


def build_ingest_report(result: IngestionResult, *, run_id: str, bbox: dict) -> dict:
    records = result.records
    outliers = count_outside_bbox(records, bbox)

    warnings = []
    if result.rows_rejected:
        warnings.append(f"{result.rows_rejected} rows rejected")
    if outliers:
        warnings.append(f"{outliers} records outside bounding box")

    return {
        "run_id": run_id,
        "status": "partial" if result.rows_rejected else "success",
        "source": {
            "origin": result.origin.value,
            "resource": result.resource,
        },
        "counts": {
            "rows_in": result.rows_in,
            "rows_out": result.rows_out,
            "rows_rejected": result.rows_rejected,
            "outside_bbox": outliers,
        },
        "rejected_rows": list(result.rejected_rows),
        "kpis": compute_kpis(records).to_dict(),
        "quality": compute_quality(records).to_dict(),
        "power_by_category": power_by_category(records),
        "top_owners_by_power": top_owners_by_power(records),
        "warnings": warnings,
    }


def write_ingest_report(data_dir: Path, result: IngestionResult, *, run_id: str, bbox: dict) -> Path:
    report_path = data_dir / "out" / "reports" / "ingest_report.json"
    write_json(report_path, build_ingest_report(result, run_id=run_id, bbox=bbox))
    return report_path
