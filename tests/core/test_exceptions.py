"""Tests for engine exception types."""

from truth_engine.core.exceptions import (
    ConfigurationError,
    DuplicateStatementError,
    PipelineStateError,
    StatementValidationError,
    TruthEngineError,
)


class TestErrorEnvelope:
    """Tests for the structured error payload."""

    def test_to_dict_envelope(self) -> None:
        """Should wrap code, message and details under 'error'."""
        error = TruthEngineError("SOME_CODE", "Something failed", {"key": "value"})

        assert error.to_dict() == {
            "error": {
                "code": "SOME_CODE",
                "message": "Something failed",
                "details": {"key": "value"},
            }
        }

    def test_details_default_to_empty(self) -> None:
        """Should use an empty details dict when none is given."""
        error = TruthEngineError("SOME_CODE", "Something failed")

        assert error.to_dict()["error"]["details"] == {}
        assert str(error) == "Something failed"


class TestErrorCodes:
    """Tests for subclass codes."""

    def test_validation_error_code(self) -> None:
        """Should use VALIDATION_ERROR."""
        error = StatementValidationError(details={"invalid_statements": []})

        assert error.code == "VALIDATION_ERROR"
        assert isinstance(error, TruthEngineError)

    def test_duplicate_statement_code(self) -> None:
        """Should name the duplicated statement."""
        error = DuplicateStatementError("stmt-1")

        assert error.code == "DUPLICATE_STATEMENT"
        assert error.error_details == {"statement_id": "stmt-1"}

    def test_configuration_error_code(self) -> None:
        """Should use CONFIGURATION_ERROR."""
        assert ConfigurationError().code == "CONFIGURATION_ERROR"


class TestPipelineStateError:
    """Tests for out-of-order stage errors."""

    def test_names_expected_and_actual_states(self) -> None:
        """Should carry operation, expected and actual states."""
        error = PipelineStateError("embed", "indexed", "empty")

        assert error.code == "PIPELINE_STATE_ERROR"
        assert error.error_details == {
            "operation": "embed",
            "expected": "indexed",
            "actual": "empty",
        }
        assert "indexed" in error.message
        assert "empty" in error.message
