"""
Error taxonomy for the SLO generation boundary.

Every failure inside the pipeline is raised as a ``SlothError`` subclass
carrying an ``ErrorKind``. The host calling ``generateSLOFromRaw`` has no
exception channel, so the outermost function converts errors into the
``"Error: <message>"`` string sentinel with ``boundary_errors``.

Kinds:
- input: required argument missing
- configuration: generator or plugin setup failed
- compilation: spec parsing, validation or plugin evaluation failed
- render: rule document could not be produced
- package: final payload could not be encoded
- unknown: anything not raised as a SlothError
"""

from __future__ import annotations

import functools
from enum import StrEnum
from typing import Any, Callable, TypeVar

import structlog

logger = structlog.get_logger()

BOUNDARY_ERROR_PREFIX = "Error: "


class ErrorKind(StrEnum):
    """Categories of failure surfaced by the generation pipeline."""

    INPUT = "input"
    CONFIGURATION = "configuration"
    COMPILATION = "compilation"
    RENDER = "render"
    PACKAGE = "package"
    UNKNOWN = "unknown"


class SlothError(Exception):
    """Base exception for wasm-sloth errors."""

    kind: ErrorKind = ErrorKind.UNKNOWN

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class InputError(SlothError):
    """Raised when a required boundary argument is missing."""

    kind = ErrorKind.INPUT


class ConfigurationError(SlothError):
    """Raised when a generator cannot be built (e.g. a strict plugin fails to load)."""

    kind = ErrorKind.CONFIGURATION


class CompilationError(SlothError):
    """Raised when a spec cannot be parsed, validated or compiled into rules."""

    kind = ErrorKind.COMPILATION


class RenderError(SlothError):
    """Raised when a rule document cannot be rendered."""

    kind = ErrorKind.RENDER


class PackageError(SlothError):
    """Raised when the response payload cannot be encoded."""

    kind = ErrorKind.PACKAGE


F = TypeVar("F", bound=Callable[..., str])


def format_error_message(error: SlothError) -> str:
    """Format an error message for the boundary string."""
    msg = error.message
    if error.details:
        detail_str = ", ".join(f"{k}={v}" for k, v in error.details.items())
        msg = f"{msg} ({detail_str})"
    return msg


def boundary_errors(*, log_errors: bool = True) -> Callable[[F], F]:
    """
    Decorator for host-facing functions that must always return a string.

    Catches exceptions and converts them to ``"Error: <message>"``.

    Args:
        log_errors: If True, log errors to structlog

    Usage:
        @boundary_errors()
        def exported(*args) -> str:
            ...
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> str:
            try:
                return func(*args, **kwargs)
            except SlothError as e:
                if log_errors:
                    logger.error(
                        "slo_generation_failed",
                        error_kind=str(e.kind),
                        error_type=type(e).__name__,
                        message=e.message,
                        **e.details,
                    )
                return BOUNDARY_ERROR_PREFIX + format_error_message(e)
            except Exception as e:
                if log_errors:
                    logger.error(
                        "slo_generation_failed",
                        error_kind=str(ErrorKind.UNKNOWN),
                        error_type=type(e).__name__,
                        message=str(e),
                    )
                return BOUNDARY_ERROR_PREFIX + str(e)

        return wrapper  # type: ignore[return-value]

    return decorator
