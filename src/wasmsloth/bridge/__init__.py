"""Boundary layer between a host environment and the SLO generator.

Flow: extension loader -> generator factory -> compilation pipeline ->
result renderer -> response packager -> ``generate_slo_from_raw``.
"""

from wasmsloth.bridge.entrypoint import (
    MISSING_INPUT_MESSAGE,
    generate_slo_from_raw,
    parse_arguments,
    register,
)
from wasmsloth.bridge.extension import load_extension
from wasmsloth.bridge.factory import default_generator, get_generator, source_labels
from wasmsloth.bridge.pipeline import compile_spec
from wasmsloth.bridge.render import render_result
from wasmsloth.bridge.response import SLOGenResponse, decode_response, package_response

__all__ = [
    "MISSING_INPUT_MESSAGE",
    "SLOGenResponse",
    "compile_spec",
    "decode_response",
    "default_generator",
    "generate_slo_from_raw",
    "get_generator",
    "load_extension",
    "package_response",
    "parse_arguments",
    "register",
    "render_result",
    "source_labels",
]
