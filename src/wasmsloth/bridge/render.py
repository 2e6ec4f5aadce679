"""Result classifier and renderer.

The output format depends on where the spec came from: Kubernetes
``PrometheusServiceLevel`` objects render as a ``PrometheusRule``, plain
``prometheus/v1`` specs render as a Prometheus rule file.
"""

from __future__ import annotations

import io
from typing import assert_never

from wasmsloth.compiler.model import GenerationResult, KubernetesSource, PrometheusSource
from wasmsloth.core.errors import RenderError, SlothError
from wasmsloth.render.kubernetes import K8sMeta, write_result_as_k8s_prometheus_operator
from wasmsloth.render.prometheus import write_result_as_prometheus_std


def render_result(result: GenerationResult) -> str:
    """
    Render a result in the format matching its original source.

    Raises:
        RenderError: If rendering fails; no partial document is returned
    """
    buf = io.StringIO()
    source = result.original_source

    try:
        match source:
            case KubernetesSource():
                meta = K8sMeta(
                    name=source.name,
                    namespace=source.namespace,
                    labels=dict(source.labels),
                    annotations=dict(source.annotations),
                )
                write_result_as_k8s_prometheus_operator(meta, result, buf)
            case PrometheusSource():
                write_result_as_prometheus_std(result, buf)
            case _:
                assert_never(source)
    except SlothError:
        raise
    except Exception as exc:
        raise RenderError(f"could not render SLO rules: {exc}") from exc

    return buf.getvalue()
