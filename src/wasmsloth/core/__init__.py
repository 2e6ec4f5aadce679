"""Core modules for wasm-sloth - error taxonomy and boundary handling."""

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

__all__ = [
    "BOUNDARY_ERROR_PREFIX",
    "ErrorKind",
    "SlothError",
    "InputError",
    "ConfigurationError",
    "CompilationError",
    "RenderError",
    "PackageError",
    "boundary_errors",
    "format_error_message",
]
