"""Rule file renderers.

- ``prometheus``: plain Prometheus rule file (``groups:``)
- ``kubernetes``: Prometheus Operator ``PrometheusRule`` resource
"""

from wasmsloth.render.kubernetes import K8sMeta, write_result_as_k8s_prometheus_operator
from wasmsloth.render.prometheus import rule_groups, write_result_as_prometheus_std

__all__ = [
    "K8sMeta",
    "rule_groups",
    "write_result_as_k8s_prometheus_operator",
    "write_result_as_prometheus_std",
]
