"""
Host-side helpers for callers of ``generateSLOFromRaw``.

Mirrors what the playground page does with the entry point: showing a
returned value in the output pane, and carrying the spec and plugin in a
shareable URL.
"""

from __future__ import annotations

import base64
import binascii
import json
from dataclasses import dataclass
from urllib.parse import parse_qs, urlencode, urlsplit, urlunsplit

from wasmsloth.bridge.response import RENDERED_FIELD

SPEC_PARAM = "slo-spec-b64"
PLUGIN_PARAM = "slo-plugin-b64"

ERROR_MARKER = "error: "


@dataclass(frozen=True)
class RenderPreview:
    """Text to show for one entry point call."""

    text: str
    is_error: bool


def preview_response(raw: str) -> RenderPreview:
    """
    Pick the text to display for a value returned by the entry point.

    JSON payloads show their rendered rules; anything else (errors, the
    missing input message) is shown as is.
    """
    text = raw
    try:
        parsed = json.loads(raw)
    except ValueError:
        parsed = None

    if isinstance(parsed, dict) and RENDERED_FIELD in parsed:
        text = str(parsed[RENDERED_FIELD] or "")

    return RenderPreview(text=text, is_error=text.strip().lower().startswith(ERROR_MARKER))


def encode_share_value(text: str) -> str:
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def decode_share_value(value: str) -> str:
    """Decode a shared base64 value; undecodable input gives an empty string."""
    cleaned = "".join(value.split()).replace("-", "+").replace("_", "/")
    cleaned += "=" * (-len(cleaned) % 4)
    try:
        return base64.b64decode(cleaned, validate=True).decode("utf-8")
    except (binascii.Error, ValueError):
        return ""


def build_share_url(base_url: str, spec: str, plugin: str = "") -> str:
    """
    Build a URL carrying the spec (and plugin) as base64 query parameters.

    Any existing query string or fragment on ``base_url`` is dropped.
    """
    parts = urlsplit(base_url)
    params: list[tuple[str, str]] = []
    if spec:
        params.append((SPEC_PARAM, encode_share_value(spec)))
    if plugin:
        params.append((PLUGIN_PARAM, encode_share_value(plugin)))
    return urlunsplit((parts.scheme, parts.netloc, parts.path, urlencode(params), ""))


def read_share_params(url: str) -> tuple[str, str]:
    """
    Read the spec and plugin from a shared URL.

    Returns:
        (spec, plugin); missing or undecodable parameters are empty strings
    """
    query = parse_qs(urlsplit(url).query)
    spec = query.get(SPEC_PARAM, [""])[0]
    plugin = query.get(PLUGIN_PARAM, [""])[0]
    return decode_share_value(spec), decode_share_value(plugin)
