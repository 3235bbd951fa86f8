"""Minimal strict schemas for YAML config validation."""

from __future__ import annotations

from mexgen.common.errors import ConfigError

INGEST_KEYS = {
    "default_source",
    "catalog_path",
    "patterns_store",
    "fill_catalog_centroids",
    "http",
    "validation",
}
HTTP_KEYS = {"connect_timeout", "read_timeout", "max_attempts", "max_wait"}
BBOX_KEYS = {"min_lat", "max_lat", "min_lon", "max_lon"}


def _assert_required_keys(obj: dict, required: set[str], ctx: str) -> None:
    missing = required - set(obj)
    if missing:
        missing_str = ", ".join(sorted(missing))
        raise ConfigError(f"Missing keys in {ctx}: {missing_str}")


def _assert_no_unknown_keys(obj: dict, known: set[str], ctx: str, allow_unknown: bool) -> None:
    if allow_unknown:
        return
    unknown = set(obj) - known
    if unknown:
        unknown_str = ", ".join(sorted(unknown))
        raise ConfigError(f"Unknown keys in {ctx}: {unknown_str}")


def _assert_mapping(obj, ctx: str) -> None:
    if not isinstance(obj, dict):
        raise ConfigError(f"{ctx} must be a mapping")


def _assert_positive_number(value, ctx: str) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        raise ConfigError(f"{ctx} must be a positive number, got {value!r}")


def validate_ingest_config(cfg: dict, *, allow_unknown: bool = False) -> dict:
    _assert_mapping(cfg, "ingest config")
    _assert_required_keys(cfg, INGEST_KEYS, "ingest config")
    _assert_no_unknown_keys(cfg, INGEST_KEYS, "ingest config", allow_unknown)

    _assert_mapping(cfg["http"], "http")
    _assert_required_keys(cfg["http"], HTTP_KEYS, "http")
    for key in sorted(HTTP_KEYS):
        _assert_positive_number(cfg["http"][key], f"http.{key}")

    _assert_mapping(cfg["validation"], "validation")
    _assert_required_keys(cfg["validation"], {"bbox_wgs84"}, "validation")
    bbox = cfg["validation"]["bbox_wgs84"]
    _assert_mapping(bbox, "validation.bbox_wgs84")
    _assert_required_keys(bbox, BBOX_KEYS, "validation.bbox_wgs84")
    if bbox["min_lat"] > bbox["max_lat"] or bbox["min_lon"] > bbox["max_lon"]:
        raise ConfigError("validation.bbox_wgs84 has min greater than max")

    if not isinstance(cfg["fill_catalog_centroids"], bool):
        raise ConfigError("fill_catalog_centroids must be true or false")

    return cfg
