"""Custom exception classes for the engine."""

from typing import Any


class TruthEngineError(Exception):
    """Base engine exception with structured error payload."""

    def __init__(
        self,
        code: str,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.code = code
        self.message = message
        self.error_details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Render the error in the standard error envelope."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.error_details,
            }
        }


class StatementValidationError(TruthEngineError):
    """Raised when ingested statements are missing required fields."""

    def __init__(
        self,
        message: str = "Invalid statement data",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            code="VALIDATION_ERROR",
            message=message,
            details=details,
        )


class DuplicateStatementError(TruthEngineError):
    """Statement ID already present in the index."""

    def __init__(self, statement_id: str) -> None:
        super().__init__(
            code="DUPLICATE_STATEMENT",
            message=f"Statement with ID {statement_id} is already indexed",
            details={"statement_id": statement_id},
        )


class PipelineStateError(TruthEngineError):
    """Orchestrator stage invoked out of order."""

    def __init__(self, operation: str, expected: str, actual: str) -> None:
        super().__init__(
            code="PIPELINE_STATE_ERROR",
            message=(
                f"Cannot run '{operation}' in state {actual}; "
                f"it requires state {expected}"
            ),
            details={"operation": operation, "expected": expected, "actual": actual},
        )


class ConfigurationError(TruthEngineError):
    """Invalid engine configuration."""

    def __init__(
        self,
        message: str = "Invalid engine configuration",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            code="CONFIGURATION_ERROR",
            message=message,
            details=details,
        )
