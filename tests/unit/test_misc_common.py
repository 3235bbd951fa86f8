import json
import logging
from pathlib import Path

from mexgen.common.constants import JSON_LOG_FIELDS
from mexgen.common.fs import read_json, read_text, write_json_atomic
from mexgen.common.geography import STATE_CENTROIDS, state_centroid, within_bbox
from mexgen.common.ids import generate_run_id
from mexgen.common.logging import JsonLineFormatter, build_logger, log_event


def test_generate_run_id_prefix():
    assert generate_run_id().startswith("run-")


def test_state_centroid_ignores_case_and_accents():
    assert len(STATE_CENTROIDS) == 32
    assert state_centroid("Yucatán") == state_centroid("yucatan")
    assert state_centroid("  MICHOACAN ").lat == 19.57
    assert state_centroid("Atlantis") is None
    assert state_centroid("") is None


def test_within_bbox_is_inclusive():
    bbox = {"min_lat": 14.0, "max_lat": 33.0, "min_lon": -118.0, "max_lon": -86.0}
    assert within_bbox(14.0, -86.0, bbox)
    assert not within_bbox(40.0, -100.0, bbox)


def test_read_text_strips_bom(tmp_path: Path):
    path = tmp_path / "bom.csv"
    path.write_bytes("\ufeffa,b\n".encode("utf-8"))
    assert read_text(path) == "a,b\n"


def test_write_json_atomic_replaces_file(tmp_path: Path):
    path = tmp_path / "store.json"
    write_json_atomic(path, {"a": 1})
    write_json_atomic(path, {"a": 2})
    assert read_json(path) == {"a": 2}
    assert [p.name for p in tmp_path.iterdir()] == ["store.json"]


def test_json_line_formatter_has_stable_fields():
    record = logging.LogRecord("mexgen", logging.INFO, __file__, 1, "ingestion end", None, None)
    record.event = "INGEST_END"
    record.rows_out = 3

    payload = json.loads(JsonLineFormatter().format(record))

    assert set(JSON_LOG_FIELDS) <= set(payload)
    assert payload["event"] == "INGEST_END"
    assert payload["rows_out"] == 3
    assert payload["rows_rejected"] is None
    assert payload["message"] == "ingestion end"
    assert payload["level"] == "INFO"


def test_build_logger_writes_run_log(tmp_path: Path):
    logger = build_logger("run-test", data_dir=tmp_path)
    log_event(logger, "stage start", run_id="run-test", stage="ingest", event="STAGE_START", status="ok")
    for handler in logger.handlers:
        handler.flush()

    lines = (tmp_path / "run_meta" / "run-test.log.jsonl").read_text(encoding="utf-8").splitlines()
    assert json.loads(lines[-1])["event"] == "STAGE_START"
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


def test_generate_run_id_tags_command():
    assert generate_run_id("ingest").startswith("run-ingest-")
