"""Plain Prometheus rule file renderer."""

from __future__ import annotations

from typing import Any, TextIO

import structlog
import yaml

from wasmsloth.compiler.model import GenerationResult, Rule
from wasmsloth.config import get_settings
from wasmsloth.core.errors import RenderError
from wasmsloth.render.yaml_dump import dump_rules_document, generated_header

logger = structlog.get_logger()

SLI_GROUP_PREFIX = "sloth-slo-sli-recordings-"
META_GROUP_PREFIX = "sloth-slo-meta-recordings-"
ALERT_GROUP_PREFIX = "sloth-slo-alerts-"


def _group(name: str, rules: list[Rule]) -> dict[str, Any]:
    return {"name": name, "rules": [rule.to_prometheus() for rule in rules]}


def rule_groups(result: GenerationResult) -> list[dict[str, Any]]:
    """
    Build Prometheus rule groups for every SLO of a result.

    Each SLO gets up to three groups (SLI recordings, metadata recordings,
    alerts); empty groups are skipped.

    Returns:
        List of rule group dicts in Prometheus rule file format
    """
    groups: list[dict[str, Any]] = []

    for slo_result in result.result.slo_results:
        slo_id = slo_result.slo.id
        rules = slo_result.prometheus_rules
        for prefix, group_rules in (
            (SLI_GROUP_PREFIX, rules.sli_error_rec_rules),
            (META_GROUP_PREFIX, rules.metadata_rec_rules),
            (ALERT_GROUP_PREFIX, rules.alert_rules),
        ):
            if group_rules:
                groups.append(_group(prefix + slo_id, group_rules))

    return groups


def write_result_as_prometheus_std(result: GenerationResult, out: TextIO) -> None:
    """
    Write a result as a plain Prometheus rule file.

    Raises:
        RenderError: If there are no rules or the document cannot be encoded
    """
    groups = rule_groups(result)
    if not groups:
        raise RenderError("no Prometheus rules generated")

    try:
        body = dump_rules_document({"groups": groups})
    except yaml.YAMLError as exc:
        raise RenderError(f"could not render Prometheus rules: {exc}") from exc

    out.write(generated_header(get_settings().version))
    out.write(body)
    logger.debug("prometheus_rules_rendered", groups=len(groups))
