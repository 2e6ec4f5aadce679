"""SLO compiler.

Turns parsed SLO specs into Sloth-compatible Prometheus recording and
alerting rules. The entry point is
``wasmsloth.compiler.generator.PrometheusSLOGenerator``.
"""

from wasmsloth.compiler.model import (
    GenerationResult,
    KubernetesSource,
    OriginalSource,
    PrometheusSource,
    PromSLO,
    PromSLOGroup,
    Rule,
    SLOGroupResult,
    SLOPrometheusRules,
    SLOResult,
)
from wasmsloth.compiler.rules import SLORulesBuilder, build_slo_rules

__all__ = [
    "GenerationResult",
    "KubernetesSource",
    "OriginalSource",
    "PrometheusSource",
    "PromSLO",
    "PromSLOGroup",
    "Rule",
    "SLOGroupResult",
    "SLOPrometheusRules",
    "SLOResult",
    "SLORulesBuilder",
    "build_slo_rules",
]
