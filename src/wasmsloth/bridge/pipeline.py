"""Compilation pipeline: one generator call, no retries, no partial results."""

from __future__ import annotations

import structlog

from wasmsloth.compiler.generator import PrometheusSLOGenerator
from wasmsloth.compiler.model import GenerationResult
from wasmsloth.core.errors import CompilationError, SlothError

logger = structlog.get_logger()


def compile_spec(generator: PrometheusSLOGenerator, raw: bytes) -> GenerationResult:
    """
    Compile raw spec bytes with the given generator.

    Raises:
        SlothError: Generator errors are propagated unchanged; anything
            else is wrapped in a CompilationError
    """
    try:
        result = generator.generate_from_raw(raw)
    except SlothError:
        raise
    except Exception as exc:
        raise CompilationError(
            f"could not generate SLOs: {exc}",
            details={"error_type": type(exc).__name__},
        ) from exc

    logger.debug("slo_spec_compiled", slos=len(result.result.slo_results))
    return result
