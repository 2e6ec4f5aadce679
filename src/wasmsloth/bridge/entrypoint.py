"""
Host-facing entry point.

``generate_slo_from_raw`` is registered once in the host's global function
namespace (as ``generateSLOFromRaw``) and always returns a string:

- ``"missing SLO YAML input"`` when called without a spec
- ``"Error: <message>"`` when any stage fails
- a JSON payload with ``resultRendered`` and ``result`` otherwise
"""

from __future__ import annotations

from collections.abc import Callable, MutableMapping
from typing import Any

import structlog

from wasmsloth.bridge.factory import default_generator, get_generator
from wasmsloth.bridge.pipeline import compile_spec
from wasmsloth.bridge.render import render_result
from wasmsloth.bridge.response import package_response
from wasmsloth.config import get_settings
from wasmsloth.core.errors import InputError, boundary_errors

logger = structlog.get_logger()

MISSING_INPUT_MESSAGE = "missing SLO YAML input"


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8")
    return str(value)


def parse_arguments(args: tuple[Any, ...]) -> tuple[bytes, str]:
    """
    Split host arguments into spec bytes and extension source.

    Raises:
        InputError: If the spec argument is missing
    """
    if not args or args[0] is None:
        raise InputError(MISSING_INPUT_MESSAGE)

    spec = _as_text(args[0]).encode("utf-8")
    plugin = _as_text(args[1]) if len(args) >= 2 else ""
    return spec, plugin


@boundary_errors()
def generate_slo_from_raw(*args: Any) -> str:
    """Generate Prometheus rules from an SLO spec and optional plugin source."""
    try:
        spec, plugin = parse_arguments(args)
    except InputError as exc:
        logger.info("slo_generation_rejected", reason=exc.message)
        return exc.message

    generator = get_generator(plugin)
    result = compile_spec(generator, spec)
    rendered = render_result(result)
    return package_response(rendered, result)


def register(namespace: MutableMapping[str, Any] | Any) -> Callable[..., str]:
    """
    Build the shared generator and expose the entry point in a host namespace.

    Mappings receive the function by item assignment, other objects by
    attribute assignment.
    """
    default_generator()

    name = get_settings().export_name
    if isinstance(namespace, MutableMapping):
        namespace[name] = generate_slo_from_raw
    else:
        setattr(namespace, name, generate_slo_from_raw)

    logger.info("slo_generator_registered", export=name)
    return generate_slo_from_raw
