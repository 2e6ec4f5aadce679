"""SLO spec documents and parsing."""

from wasmsloth.spec.parser import SpecParseError, load_spec_document, parse_spec

__all__ = [
    "SpecParseError",
    "load_spec_document",
    "parse_spec",
]
