"""Prometheus Operator ``PrometheusRule`` renderer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, TextIO

import structlog
import yaml

from wasmsloth.compiler.model import GenerationResult
from wasmsloth.config import get_settings
from wasmsloth.core.errors import RenderError
from wasmsloth.render.prometheus import rule_groups
from wasmsloth.render.yaml_dump import dump_rules_document, generated_header

logger = structlog.get_logger()

PROMETHEUS_RULE_API_VERSION = "monitoring.coreos.com/v1"
PROMETHEUS_RULE_KIND = "PrometheusRule"

MANAGED_LABELS = {
    "app.kubernetes.io/component": "SLO",
    "app.kubernetes.io/managed-by": "sloth",
}


@dataclass
class K8sMeta:
    """Kubernetes object metadata copied onto the generated resource."""

    name: str
    namespace: str = ""
    labels: dict[str, str] = field(default_factory=dict)
    annotations: dict[str, str] = field(default_factory=dict)


def build_prometheus_rule(meta: K8sMeta, result: GenerationResult) -> dict[str, Any]:
    """Build the PrometheusRule object as a dict."""
    if not meta.name:
        raise RenderError(f"{PROMETHEUS_RULE_KIND} requires a metadata name")

    metadata: dict[str, Any] = {"name": meta.name}
    if meta.namespace:
        metadata["namespace"] = meta.namespace
    metadata["labels"] = {**MANAGED_LABELS, **meta.labels}
    if meta.annotations:
        metadata["annotations"] = dict(meta.annotations)

    return {
        "apiVersion": PROMETHEUS_RULE_API_VERSION,
        "kind": PROMETHEUS_RULE_KIND,
        "metadata": metadata,
        "spec": {"groups": rule_groups(result)},
    }


def write_result_as_k8s_prometheus_operator(
    meta: K8sMeta, result: GenerationResult, out: TextIO
) -> None:
    """
    Write a result as a Prometheus Operator PrometheusRule resource.

    Raises:
        RenderError: If the metadata is incomplete or the document cannot be encoded
    """
    obj = build_prometheus_rule(meta, result)

    try:
        body = dump_rules_document(obj)
    except yaml.YAMLError as exc:
        raise RenderError(f"could not render {PROMETHEUS_RULE_KIND}: {exc}") from exc

    out.write(generated_header(get_settings().version))
    out.write(body)
    logger.debug(
        "prometheus_rule_rendered",
        name=meta.name,
        namespace=meta.namespace,
        groups=len(obj["spec"]["groups"]),
    )
