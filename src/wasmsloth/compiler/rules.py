"""Builder for Prometheus SLI, metadata and alert rules from a compiled SLO."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import timedelta

from wasmsloth.compiler.model import AlertMeta, PromSLO, Rule, SLOPrometheusRules
from wasmsloth.compiler.template import render_window
from wasmsloth.compiler.windows import (
    DEFAULT_ALERT_WINDOWS,
    AlertWindow,
    AlertWindows,
    format_factor,
    parse_duration,
)

SLI_ERROR_METRIC = "slo:sli_error:ratio_rate{window}"
ERROR_BUDGET_METRIC = "slo:error_budget:ratio"
SLOTH_MODE = "lib-gen-prom"
SLOTH_SPEC = "prometheus/v1"

SLOTH_ID_LABEL = "sloth_id"
SLOTH_SERVICE_LABEL = "sloth_service"
SLOTH_SLO_LABEL = "sloth_slo"
SLOTH_WINDOW_LABEL = "sloth_window"
SLOTH_SEVERITY_LABEL = "sloth_severity"

PAGE_SEVERITY = "page"
TICKET_SEVERITY = "ticket"


def format_ratio(value: float) -> str:
    """Format a ratio without float noise (``0.999`` rather than ``0.9990000000000001``)."""
    return repr(round(value, 12))


def _escape(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"')


def merge_labels(*label_sets: Mapping[str, str]) -> dict[str, str]:
    """Merge label mappings, later ones win."""
    merged: dict[str, str] = {}
    for labels in label_sets:
        merged.update(labels)
    return merged


class SLORulesBuilder:
    """Builds all Prometheus rules for a single SLO.

    Rule names and label layout follow Sloth, so dashboards and alerts built
    for Sloth output work unchanged.
    """

    def __init__(
        self,
        slo: PromSLO,
        *,
        period: str,
        extra_labels: Mapping[str, str] | None = None,
        alert_windows: AlertWindows = DEFAULT_ALERT_WINDOWS,
        version: str = "",
    ):
        """Initialize builder.

        Args:
            slo: SLO with a resolved events or raw SLI
            period: SLO period (e.g. "30d")
            extra_labels: Labels added to every generated rule
            alert_windows: Burn rate window pairs
            version: Generator version for the info metric
        """
        self.slo = slo
        self.period = period
        self.period_delta: timedelta = parse_duration(period)
        self.extra_labels = dict(extra_labels or {})
        self.alert_windows = alert_windows
        self.version = version

    @property
    def sloth_labels(self) -> dict[str, str]:
        return {
            SLOTH_ID_LABEL: self.slo.id,
            SLOTH_SERVICE_LABEL: self.slo.service,
            SLOTH_SLO_LABEL: self.slo.name,
        }

    @property
    def selector(self) -> str:
        """PromQL label selector matching this SLO's series."""
        matchers = ", ".join(f'{k}="{_escape(v)}"' for k, v in self.sloth_labels.items())
        return "{" + matchers + "}"

    @property
    def error_budget(self) -> float:
        return 1 - self.slo.objective / 100

    def build(self) -> SLOPrometheusRules:
        return SLOPrometheusRules(
            sli_error_rec_rules=self.build_sli_rules(),
            metadata_rec_rules=self.build_metadata_rules(),
            alert_rules=self.build_alert_rules(),
        )

    def _rule_labels(self, **extra: str) -> dict[str, str]:
        return merge_labels(self.slo.labels, self.extra_labels, self.sloth_labels, extra)

    def build_sli_rules(self) -> list[Rule]:
        """Build one error ratio recording rule per window plus the period rule."""
        rules: list[Rule] = []

        for window in self.alert_windows.sli_windows():
            if window == self.period:
                continue
            rules.append(
                Rule(
                    record=SLI_ERROR_METRIC.format(window=window),
                    expr=self._sli_expr(window),
                    labels=self._rule_labels(**{SLOTH_WINDOW_LABEL: window}),
                )
            )

        # Period ratio is the average of the 5m ratio over the period.
        short_metric = SLI_ERROR_METRIC.format(window="5m")
        rules.append(
            Rule(
                record=SLI_ERROR_METRIC.format(window=self.period),
                expr=(
                    f"sum_over_time({short_metric}{self.selector}[{self.period}])\n"
                    f"/ ignoring ({SLOTH_WINDOW_LABEL})\n"
                    f"count_over_time({short_metric}{self.selector}[{self.period}])\n"
                ),
                labels=self._rule_labels(**{SLOTH_WINDOW_LABEL: self.period}),
            )
        )

        return rules

    def _sli_expr(self, window: str) -> str:
        sli = self.slo.sli
        if sli.events:
            return (
                f"({render_window(sli.events.error_query, window)})\n"
                "/\n"
                f"({render_window(sli.events.total_query, window)})\n"
            )
        if sli.raw:
            return f"({render_window(sli.raw.error_ratio_query, window)})"
        raise ValueError(f"SLO {self.slo.id} has no resolved SLI query")

    def build_metadata_rules(self) -> list[Rule]:
        """Build objective, budget, burn rate and info recording rules."""
        labels = self._rule_labels()
        selector = self.selector
        on_labels = f"on({SLOTH_ID_LABEL}, {SLOTH_SLO_LABEL}, {SLOTH_SERVICE_LABEL}) group_left"
        period_days = self.period_delta / timedelta(days=1)

        return [
            Rule(
                record="slo:objective:ratio",
                expr=f"vector({format_ratio(self.slo.objective / 100)})",
                labels=dict(labels),
            ),
            Rule(
                record=ERROR_BUDGET_METRIC,
                expr=f"vector(1-{format_ratio(self.slo.objective / 100)})",
                labels=dict(labels),
            ),
            Rule(
                record="slo:time_period:days",
                expr=f"vector({format_factor(period_days)})",
                labels=dict(labels),
            ),
            Rule(
                record="slo:current_burn_rate:ratio",
                expr=(
                    f"{SLI_ERROR_METRIC.format(window='5m')}{selector}\n"
                    f"/ {on_labels}\n"
                    f"{ERROR_BUDGET_METRIC}{selector}\n"
                ),
                labels=dict(labels),
            ),
            Rule(
                record="slo:period_burn_rate:ratio",
                expr=(
                    f"{SLI_ERROR_METRIC.format(window=self.period)}{selector}\n"
                    f"/ {on_labels}\n"
                    f"{ERROR_BUDGET_METRIC}{selector}\n"
                ),
                labels=dict(labels),
            ),
            Rule(
                record="slo:period_error_budget_remaining:ratio",
                expr=f"1 - slo:period_burn_rate:ratio{selector}",
                labels=dict(labels),
            ),
            Rule(
                record="sloth_slo_info",
                expr="vector(1)",
                labels=merge_labels(
                    labels,
                    {
                        "sloth_mode": SLOTH_MODE,
                        "sloth_spec": SLOTH_SPEC,
                        "sloth_version": self.version,
                        "sloth_objective": format_factor(self.slo.objective),
                    },
                ),
            ),
        ]

    def build_alert_rules(self) -> list[Rule]:
        """Build multiwindow multi-burn-rate page and ticket alerts."""
        rules: list[Rule] = []
        windows = self.alert_windows

        if not self.slo.page_alert_meta.disable:
            rules.append(
                self._alert_rule(
                    PAGE_SEVERITY,
                    self.slo.page_alert_meta,
                    windows.page_quick,
                    windows.page_slow,
                )
            )
        if not self.slo.ticket_alert_meta.disable:
            rules.append(
                self._alert_rule(
                    TICKET_SEVERITY,
                    self.slo.ticket_alert_meta,
                    windows.ticket_quick,
                    windows.ticket_slow,
                )
            )

        return rules

    def _alert_rule(
        self,
        severity: str,
        meta: AlertMeta,
        quick: AlertWindow,
        slow: AlertWindow,
    ) -> Rule:
        expr = f"{self._burn_condition(quick)}\nor\n{self._burn_condition(slow)}\n"
        default_annotations = {
            "title": (
                f"({severity}) {{{{$labels.{SLOTH_SERVICE_LABEL}}}}} "
                f"{{{{$labels.{SLOTH_SLO_LABEL}}}}} SLO error budget burn rate is too fast."
            ),
            "summary": (
                f"{{{{$labels.{SLOTH_SERVICE_LABEL}}}}} {{{{$labels.{SLOTH_SLO_LABEL}}}}} "
                "SLO error budget burn rate is over expected."
            ),
        }

        return Rule(
            alert=self.slo.alert_name,
            expr=expr,
            labels=merge_labels(
                self.slo.alert_labels,
                meta.labels,
                self.extra_labels,
                {SLOTH_SEVERITY_LABEL: severity},
            ),
            annotations=merge_labels(
                default_annotations, self.slo.alert_annotations, meta.annotations
            ),
        )

    def _burn_condition(self, window: AlertWindow) -> str:
        factor = format_factor(window.burn_factor(self.period_delta))
        budget = format_ratio(self.error_budget)
        threshold = f"({factor} * {budget})"

        def over(w: str) -> str:
            metric = SLI_ERROR_METRIC.format(window=w)
            return f"max({metric}{self.selector} > {threshold}) without ({SLOTH_WINDOW_LABEL})"

        return f"(\n    {over(window.short_window)}\n    and\n    {over(window.long_window)}\n)"


def build_slo_rules(
    slo: PromSLO,
    *,
    period: str,
    extra_labels: Mapping[str, str] | None = None,
    version: str = "",
) -> SLOPrometheusRules:
    """Convenience function to build all rules for one SLO.

    Example:
        >>> rules = build_slo_rules(slo, period="30d", extra_labels={"source": "wasm-sloth"})
        >>> [r.record for r in rules.sli_error_rec_rules][:2]
        ['slo:sli_error:ratio_rate5m', 'slo:sli_error:ratio_rate30m']
    """
    builder = SLORulesBuilder(slo, period=period, extra_labels=extra_labels, version=version)
    return builder.build()
