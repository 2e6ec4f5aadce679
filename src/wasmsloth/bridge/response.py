"""Response packager: rendered text plus the structured result as one JSON payload."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

from wasmsloth.compiler.model import GenerationResult
from wasmsloth.core.errors import PackageError

RENDERED_FIELD = "resultRendered"
RESULT_FIELD = "result"


@dataclass
class SLOGenResponse:
    """Decoded boundary payload."""

    result_rendered: str
    result: GenerationResult

    def to_dict(self) -> dict[str, Any]:
        return {RENDERED_FIELD: self.result_rendered, RESULT_FIELD: self.result.to_dict()}


def package_response(rendered: str, result: GenerationResult) -> str:
    """
    Encode rendered text and the full result as JSON.

    Raises:
        PackageError: If the payload cannot be encoded
    """
    try:
        return json.dumps(SLOGenResponse(result_rendered=rendered, result=result).to_dict())
    except (TypeError, ValueError) as exc:
        raise PackageError(f"could not encode response: {exc}") from exc


def decode_response(payload: str) -> SLOGenResponse:
    """
    Decode a payload produced by ``package_response``.

    Raises:
        PackageError: If the payload is not a valid response
    """
    try:
        data = json.loads(payload)
        return SLOGenResponse(
            result_rendered=str(data[RENDERED_FIELD]),
            result=GenerationResult.from_dict(data[RESULT_FIELD]),
        )
    except (TypeError, ValueError, KeyError) as exc:
        raise PackageError(f"could not decode response: {exc}") from exc
