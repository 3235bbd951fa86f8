"""Application constants."""

USER_AGENT = "mexgen/0.3 (+energy-atlas; contact: configured-email)"
COMMANDS = ("ingest", "patterns")
EXIT_SUCCESS = 0
EXIT_PARTIAL = 10
EXIT_HARD_FAIL = 20

CSV_MIN_COLUMNS = 19
CATALOG_NAME_PLACEHOLDER = "[no name]"
PATTERNS_STORE_KEY = "classification_patterns"

# Half the circumference of the Web Mercator sphere, in metres.
WEB_MERCATOR_HALF_EXTENT = 20037508.34

JSON_LOG_FIELDS = (
    "timestamp",
    "run_id",
    "stage",
    "source",
    "event",
    "status",
    "rows_in",
    "rows_out",
    "rows_rejected",
    "error_code",
    "message",
)
