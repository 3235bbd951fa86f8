"""Ingestion of plant data from uploads, the default CSV and the fallback catalog."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import IO, Iterable, Union
from urllib.parse import urlparse

from mexgen.classify.ownership import (
    ClassificationStrategy,
    FieldSectorStrategy,
    PatternSectorStrategy,
    PatternSet,
    PatternStore,
)
from mexgen.common.config_loader import BUNDLED_CSV, DEFAULT_CONFIG_DIR, IngestConfig, load_config
from mexgen.common.errors import ConfigError, IngestionError
from mexgen.common.fs import read_text, read_yaml
from mexgen.common.http import HttpClient
from mexgen.common.logging import log_event
from mexgen.common.models import PlantRecord, SourceOrigin
from mexgen.parsing.tokenizer import tokenize
from mexgen.pipeline.builder import CatalogEntry, build_from_catalog, build_from_csv_row

logger = logging.getLogger(__name__)

Source = Union[str, Path, IO[str], IO[bytes], None]


@dataclass(frozen=True)
class IngestionResult:
    records: list[PlantRecord]
    origin: SourceOrigin
    resource: str
    rows_in: int
    rows_rejected: int
    rejected_rows: list[int] = field(default_factory=list)

    @property
    def rows_out(self) -> int:
        return len(self.records)


def looks_like_csv(text: str) -> bool:
    return "\n" in text and ("," in text or ";" in text)


def _is_url(location: str) -> bool:
    return urlparse(location).scheme in ("http", "https")


def _decode(payload: str | bytes) -> str:
    if isinstance(payload, bytes):
        return payload.decode("utf-8-sig")
    return payload


def _read_location(location: str, config: IngestConfig, http_client: HttpClient | None) -> str:
    if _is_url(location):
        owns_client = http_client is None
        client = http_client or HttpClient(timeout=config.timeout, retry=config.retry)
        try:
            return client.get_text(location)
        finally:
            if owns_client:
                client.close()

    path = Path(location)
    try:
        return read_text(path)
    except FileNotFoundError as exc:
        raise IngestionError(f"Could not load {location}: not found", resource=location, status=404) from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise IngestionError(f"Could not read {location}: {exc}", resource=location) from exc


def _resolve_source(
    source: Source,
    config: IngestConfig,
    http_client: HttpClient | None,
) -> tuple[str, SourceOrigin, str]:
    """Return (csv text, origin, resource label) for any accepted source."""
    if source is None:
        location = config.default_source or str(BUNDLED_CSV)
        return _read_location(location, config, http_client), SourceOrigin.CSV_DEFAULT, location
    if isinstance(source, Path):
        return _read_location(str(source), config, http_client), SourceOrigin.CSV_UPLOAD, str(source)
    if isinstance(source, str):
        if not source.strip() or looks_like_csv(source):
            return source, SourceOrigin.CSV_UPLOAD, "<text>"
        return _read_location(source, config, http_client), SourceOrigin.CSV_UPLOAD, source
    if hasattr(source, "read"):
        label = str(getattr(source, "name", "<upload>"))
        try:
            return _decode(source.read()), SourceOrigin.CSV_UPLOAD, label
        except (OSError, UnicodeDecodeError) as exc:
            raise IngestionError(f"Could not read {label}: {exc}", resource=label) from exc
    raise TypeError(f"Unsupported ingestion source: {type(source).__name__}")


def parse_plants_csv(
    content: str,
    *,
    origin: SourceOrigin = SourceOrigin.CSV_UPLOAD,
    resource: str = "<text>",
    strategy: ClassificationStrategy | None = None,
) -> IngestionResult:
    """Build records from CSV text; malformed rows are dropped and counted."""
    rows = tokenize(content)
    header_width = len(rows[0]) if rows else None
    data_rows = rows[1:]
    strategy = strategy or FieldSectorStrategy()

    records: list[PlantRecord] = []
    rejected: list[int] = []
    for index, row in enumerate(data_rows, start=1):
        try:
            record = build_from_csv_row(
                row, index, strategy=strategy, origin=origin, header_width=header_width
            )
        except Exception:
            logger.debug("row %d of %s raised during build", index, resource, exc_info=True)
            record = None
        if record is None:
            rejected.append(index)
            continue
        records.append(record)

    return IngestionResult(
        records=records,
        origin=origin,
        resource=resource,
        rows_in=len(data_rows),
        rows_rejected=len(rejected),
        rejected_rows=rejected,
    )


def run_ingestion(
    source: Source = None,
    *,
    config: IngestConfig | None = None,
    http_client: HttpClient | None = None,
    strategy: ClassificationStrategy | None = None,
) -> IngestionResult:
    config = config or load_config(DEFAULT_CONFIG_DIR)
    try:
        content, origin, resource = _resolve_source(source, config, http_client)
    except IngestionError as exc:
        log_event(
            logger,
            f"ingestion failed for {exc.resource}",
            level=logging.ERROR,
            stage="ingest",
            source=exc.resource,
            event="FETCH_FAIL",
            status="error",
            error_code=exc.error_code,
        )
        raise

    log_event(logger, "ingestion start", stage="ingest", source=resource, event="INGEST_START", status="ok")
    result = parse_plants_csv(content, origin=origin, resource=resource, strategy=strategy)
    log_event(
        logger,
        "ingestion end",
        stage="ingest",
        source=resource,
        event="INGEST_END",
        status="partial" if result.rows_rejected else "ok",
        rows_in=result.rows_in,
        rows_out=result.rows_out,
        rows_rejected=result.rows_rejected,
    )
    return result


def ingest(
    source: Source = None,
    *,
    config: IngestConfig | None = None,
    http_client: HttpClient | None = None,
    strategy: ClassificationStrategy | None = None,
) -> list[PlantRecord]:
    """Ingest a CSV upload, CSV text, URL/path, or the default CSV when omitted.

    Raises ``IngestionError`` when the resource cannot be fetched or read.
    """
    return run_ingestion(source, config=config, http_client=http_client, strategy=strategy).records


def _catalog_entry(item: dict) -> CatalogEntry:
    if not isinstance(item, dict) or not item.get("key"):
        raise ConfigError(f"Catalog entry without key: {item!r}")
    return CatalogEntry(
        key=str(item["key"]),
        name=str(item.get("name") or ""),
        operator=str(item.get("operator") or ""),
        power_mw=item.get("mw"),
        source=str(item.get("source") or ""),
        method=str(item.get("method") or ""),
        external_id=str(item.get("wikidata") or ""),
        lat=item.get("lat"),
        lon=item.get("lon"),
        state=str(item.get("state") or ""),
        municipality=str(item.get("municipality") or ""),
    )


def load_catalog(path: Path) -> list[CatalogEntry]:
    payload = read_yaml(path)
    if not isinstance(payload, dict) or not isinstance(payload.get("plants"), list):
        raise ConfigError(f"Catalog {path} must contain a 'plants' list")
    entries = [_catalog_entry(item) for item in payload["plants"]]
    keys = [entry.key for entry in entries]
    dupes = {key for key in keys if keys.count(key) > 1}
    if dupes:
        raise ConfigError(f"Duplicate catalog keys: {', '.join(sorted(dupes))}")
    return entries


def ingest_catalog(
    entries: Iterable[CatalogEntry] | None = None,
    *,
    patterns: PatternSet | None = None,
    config: IngestConfig | None = None,
) -> IngestionResult:
    """Build records from the hardcoded fallback catalog.

    ``patterns`` is the snapshot used for the whole pass. When omitted, the
    list persisted at ``config.patterns_store`` is loaded once, falling back
    to the built-in defaults if nothing is stored. Entries that fail to build
    are dropped and counted.
    """
    config = config or load_config(DEFAULT_CONFIG_DIR)
    resource = "<entries>" if entries is not None else str(config.catalog_path)
    catalog = list(entries) if entries is not None else load_catalog(config.catalog_path)
    if patterns is None:
        patterns = PatternStore(config.patterns_store).load()
    strategy = PatternSectorStrategy(patterns)

    records: list[PlantRecord] = []
    rejected: list[int] = []
    for index, entry in enumerate(catalog, start=1):
        try:
            records.append(
                build_from_catalog(entry, strategy=strategy, fill_centroids=config.fill_catalog_centroids)
            )
        except Exception:
            logger.debug("catalog entry %d of %s raised during build", index, resource, exc_info=True)
            rejected.append(index)

    log_event(
        logger,
        "catalog ingested",
        stage="catalog",
        source=resource,
        event="INGEST_END",
        status="partial" if rejected else "ok",
        rows_in=len(catalog),
        rows_out=len(records),
        rows_rejected=len(rejected),
    )
    return IngestionResult(
        records=records,
        origin=SourceOrigin.CATALOG,
        resource=resource,
        rows_in=len(catalog),
        rows_rejected=len(rejected),
        rejected_rows=rejected,
    )
