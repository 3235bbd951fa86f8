"""Configuration loading and validation."""

from __future__ import annotations

import copy
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from mexgen.common.errors import ConfigError
from mexgen.common.fs import read_yaml
from mexgen.common.geography import MEXICO_BBOX_WGS84
from mexgen.common.http import RetryConfig, TimeoutConfig
from mexgen.common.schema import validate_ingest_config

CONFIG_FILENAME = "ingest.yml"
DEFAULT_CONFIG_DIR = Path("config")
PACKAGE_DATA_DIR = Path(__file__).resolve().parent.parent / "data"
BUNDLED_CSV = PACKAGE_DATA_DIR / "centrales.csv"
BUNDLED_CATALOG = PACKAGE_DATA_DIR / "catalog.yml"

DEFAULTS: dict[str, Any] = {
    "default_source": "",
    "catalog_path": "",
    "patterns_store": "./data/state/patterns.json",
    "fill_catalog_centroids": False,
    "http": {
        "connect_timeout": 20,
        "read_timeout": 120,
        "max_attempts": 5,
        "max_wait": 30,
    },
    "validation": {"bbox_wgs84": dict(MEXICO_BBOX_WGS84)},
}


@dataclass(frozen=True)
class IngestConfig:
    default_source: str
    catalog_path: Path
    patterns_store: Path
    fill_catalog_centroids: bool
    timeout: TimeoutConfig
    retry: RetryConfig
    bbox_wgs84: dict[str, float]


def _deep_merge(base: Any, overlay: Any) -> Any:
    if isinstance(base, dict) and isinstance(overlay, dict):
        merged = dict(base)
        for key, value in overlay.items():
            if key in merged:
                merged[key] = _deep_merge(merged[key], value)
            else:
                merged[key] = value
        return merged
    return overlay


def _load_yaml_layer(path: Path | None) -> dict:
    if path is None or not path.exists():
        return {}
    layer = read_yaml(path)
    if layer is None:
        return {}
    if not isinstance(layer, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")
    return layer


def _path_or_default(value: str, fallback: Path) -> Path:
    return Path(value) if value else fallback


def load_config(
    config_dir: Path | None = None,
    *,
    overlay_config_dir: Path | None = None,
    allow_unknown: bool = False,
) -> IngestConfig:
    """Load ``ingest.yml`` from ``config_dir`` over the built-in defaults."""
    merged = copy.deepcopy(DEFAULTS)
    if config_dir is not None:
        merged = _deep_merge(merged, _load_yaml_layer(config_dir / CONFIG_FILENAME))
    if overlay_config_dir is not None:
        merged = _deep_merge(merged, _load_yaml_layer(overlay_config_dir / CONFIG_FILENAME))

    cfg = validate_ingest_config(merged, allow_unknown=allow_unknown)
    http = cfg["http"]

    return IngestConfig(
        default_source=str(cfg["default_source"] or ""),
        catalog_path=_path_or_default(str(cfg["catalog_path"] or ""), BUNDLED_CATALOG),
        patterns_store=Path(str(cfg["patterns_store"])),
        fill_catalog_centroids=cfg["fill_catalog_centroids"],
        timeout=TimeoutConfig(connect=float(http["connect_timeout"]), read=float(http["read_timeout"])),
        retry=RetryConfig(max_attempts=int(http["max_attempts"]), max_wait=float(http["max_wait"])),
        bbox_wgs84={key: float(value) for key, value in cfg["validation"]["bbox_wgs84"].items()},
    )
