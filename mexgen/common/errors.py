"""Domain errors and failure typing."""


class PipelineError(Exception):
    """Base class for pipeline failures."""

    error_code = "PIPELINE_ERROR"


class ConfigError(PipelineError):
    """Raised for invalid or missing configuration."""

    error_code = "CONFIG_ERROR"


class ContractError(PipelineError):
    """Raised when a plant record breaks its invariants."""

    error_code = "CONTRACT_ERROR"


class StageError(PipelineError):
    """Raised for stage failures that should halt the run."""

    error_code = "STAGE_ERROR"


class IngestionError(StageError):
    """Raised when the input resource cannot be fetched or read."""

    error_code = "INGESTION_ERROR"

    def __init__(self, message: str, *, resource: str | None = None, status: int | None = None) -> None:
        super().__init__(message)
        self.resource = resource
        self.status = status
