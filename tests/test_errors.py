"""Tests for the error taxonomy and the boundary decorator."""

import pytest
from wasmsloth.core.errors import (
    BOUNDARY_ERROR_PREFIX,
    CompilationError,
    ConfigurationError,
    ErrorKind,
    InputError,
    PackageError,
    RenderError,
    SlothError,
    boundary_errors,
    format_error_message,
)


class TestErrorKinds:
    """Tests for error classes."""

    @pytest.mark.parametrize(
        "error_cls,kind",
        [
            (InputError, ErrorKind.INPUT),
            (ConfigurationError, ErrorKind.CONFIGURATION),
            (CompilationError, ErrorKind.COMPILATION),
            (RenderError, ErrorKind.RENDER),
            (PackageError, ErrorKind.PACKAGE),
            (SlothError, ErrorKind.UNKNOWN),
        ],
    )
    def test_kind(self, error_cls, kind):
        error = error_cls("boom")

        assert error.kind == kind
        assert isinstance(error, SlothError)
        assert error.message == "boom"
        assert error.details == {}

    def test_error_kind_is_string(self):
        assert str(ErrorKind.COMPILATION) == "compilation"


class TestFormatErrorMessage:
    """Tests for format_error_message."""

    def test_message_only(self):
        assert format_error_message(RenderError("no rules")) == "no rules"

    def test_details_appended(self):
        error = ConfigurationError("bad plugin", details={"module": "plugin.py", "line": 3})

        assert format_error_message(error) == "bad plugin (module=plugin.py, line=3)"


class TestBoundaryErrors:
    """Tests for the boundary_errors decorator."""

    def test_returns_value_on_success(self):
        @boundary_errors()
        def ok() -> str:
            return "fine"

        assert ok() == "fine"

    def test_sloth_error_becomes_sentinel(self):
        @boundary_errors()
        def fails() -> str:
            raise CompilationError("invalid SLO group: at least one SLO is required")

        assert fails() == "Error: invalid SLO group: at least one SLO is required"

    def test_sentinel_includes_details(self):
        @boundary_errors()
        def fails() -> str:
            raise CompilationError("could not generate SLOs", details={"error_type": "KeyError"})

        assert fails() == "Error: could not generate SLOs (error_type=KeyError)"

    def test_unexpected_exception_becomes_sentinel(self):
        @boundary_errors()
        def fails() -> str:
            raise RuntimeError("kaput")

        result = fails()

        assert result.startswith(BOUNDARY_ERROR_PREFIX)
        assert result == "Error: kaput"

    def test_without_logging(self):
        @boundary_errors(log_errors=False)
        def fails() -> str:
            raise PackageError("could not encode response")

        assert fails() == "Error: could not encode response"

    def test_preserves_function_metadata(self):
        @boundary_errors()
        def exported(*args) -> str:
            """Exported docstring."""
            return ""

        assert exported.__name__ == "exported"
        assert exported.__doc__ == "Exported docstring."
