"""
Data models for compiled SLOs and generated Prometheus rules.

``to_dict``/``from_dict`` use PascalCase keys; this is the schema of the
``result`` field in the boundary payload and decoding it must give back an
equal object.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


def _str_map(data: dict[str, Any] | None) -> dict[str, str]:
    return {str(k): str(v) for k, v in (data or {}).items()}


@dataclass
class SLIEvents:
    """Event based SLI: ratio of bad events to total events."""

    error_query: str
    total_query: str

    def to_dict(self) -> dict[str, Any]:
        return {"ErrorQuery": self.error_query, "TotalQuery": self.total_query}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SLIEvents:
        return cls(error_query=data["ErrorQuery"], total_query=data["TotalQuery"])


@dataclass
class SLIRaw:
    """Raw SLI: a query that already returns the error ratio."""

    error_ratio_query: str

    def to_dict(self) -> dict[str, Any]:
        return {"ErrorRatioQuery": self.error_ratio_query}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SLIRaw:
        return cls(error_ratio_query=data["ErrorRatioQuery"])


@dataclass
class SLIPluginRef:
    """Reference to an SLI plugin and the options passed to it."""

    id: str
    options: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {"ID": self.id, "Options": dict(self.options)}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SLIPluginRef:
        return cls(id=data["ID"], options=_str_map(data.get("Options")))


@dataclass
class SLI:
    """Service level indicator.

    Exactly one of ``events``/``raw``/``plugin`` is set on a parsed SLO.
    After compilation plugins are resolved, so ``raw`` holds the plugin
    query and ``plugin`` keeps the reference for traceability.
    """

    events: SLIEvents | None = None
    raw: SLIRaw | None = None
    plugin: SLIPluginRef | None = None

    def kinds(self) -> list[str]:
        return [
            name
            for name, value in (("events", self.events), ("raw", self.raw), ("plugin", self.plugin))
            if value is not None
        ]

    def to_dict(self) -> dict[str, Any]:
        return {
            "Events": self.events.to_dict() if self.events else None,
            "Raw": self.raw.to_dict() if self.raw else None,
            "Plugin": self.plugin.to_dict() if self.plugin else None,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SLI:
        return cls(
            events=SLIEvents.from_dict(data["Events"]) if data.get("Events") else None,
            raw=SLIRaw.from_dict(data["Raw"]) if data.get("Raw") else None,
            plugin=SLIPluginRef.from_dict(data["Plugin"]) if data.get("Plugin") else None,
        )


@dataclass
class AlertMeta:
    """Page or ticket alert settings."""

    disable: bool = False
    labels: dict[str, str] = field(default_factory=dict)
    annotations: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "Disable": self.disable,
            "Labels": dict(self.labels),
            "Annotations": dict(self.annotations),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AlertMeta:
        return cls(
            disable=bool(data.get("Disable", False)),
            labels=_str_map(data.get("Labels")),
            annotations=_str_map(data.get("Annotations")),
        )


@dataclass
class PromSLO:
    """A single SLO ready for rule generation."""

    id: str
    name: str
    service: str
    sli: SLI
    time_window: str
    objective: float
    description: str = ""
    labels: dict[str, str] = field(default_factory=dict)
    alert_name: str = ""
    alert_labels: dict[str, str] = field(default_factory=dict)
    alert_annotations: dict[str, str] = field(default_factory=dict)
    page_alert_meta: AlertMeta = field(default_factory=AlertMeta)
    ticket_alert_meta: AlertMeta = field(default_factory=AlertMeta)

    def to_dict(self) -> dict[str, Any]:
        return {
            "ID": self.id,
            "Name": self.name,
            "Description": self.description,
            "Service": self.service,
            "SLI": self.sli.to_dict(),
            "TimeWindow": self.time_window,
            "Objective": self.objective,
            "Labels": dict(self.labels),
            "AlertName": self.alert_name,
            "AlertLabels": dict(self.alert_labels),
            "AlertAnnotations": dict(self.alert_annotations),
            "PageAlertMeta": self.page_alert_meta.to_dict(),
            "TicketAlertMeta": self.ticket_alert_meta.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PromSLO:
        return cls(
            id=data["ID"],
            name=data["Name"],
            description=data.get("Description", ""),
            service=data["Service"],
            sli=SLI.from_dict(data["SLI"]),
            time_window=data["TimeWindow"],
            objective=float(data["Objective"]),
            labels=_str_map(data.get("Labels")),
            alert_name=data.get("AlertName", ""),
            alert_labels=_str_map(data.get("AlertLabels")),
            alert_annotations=_str_map(data.get("AlertAnnotations")),
            page_alert_meta=AlertMeta.from_dict(data.get("PageAlertMeta") or {}),
            ticket_alert_meta=AlertMeta.from_dict(data.get("TicketAlertMeta") or {}),
        )


@dataclass
class PrometheusSource:
    """Spec came from a plain ``prometheus/v1`` Sloth document."""

    version: str = "prometheus/v1"

    KIND = "Prometheus"

    def to_dict(self) -> dict[str, Any]:
        return {"Kind": self.KIND, "Version": self.version}


@dataclass
class KubernetesSource:
    """Spec came from a ``PrometheusServiceLevel`` Kubernetes object."""

    name: str
    namespace: str = ""
    labels: dict[str, str] = field(default_factory=dict)
    annotations: dict[str, str] = field(default_factory=dict)

    KIND = "Kubernetes"

    def to_dict(self) -> dict[str, Any]:
        return {
            "Kind": self.KIND,
            "Name": self.name,
            "Namespace": self.namespace,
            "Labels": dict(self.labels),
            "Annotations": dict(self.annotations),
        }


OriginalSource = PrometheusSource | KubernetesSource


def original_source_from_dict(data: dict[str, Any]) -> OriginalSource:
    """Decode an ``OriginalSource`` by its ``Kind`` tag."""
    kind = data.get("Kind")
    if kind == PrometheusSource.KIND:
        return PrometheusSource(version=data.get("Version", "prometheus/v1"))
    if kind == KubernetesSource.KIND:
        return KubernetesSource(
            name=data["Name"],
            namespace=data.get("Namespace", ""),
            labels=_str_map(data.get("Labels")),
            annotations=_str_map(data.get("Annotations")),
        )
    raise ValueError(f"Unknown OriginalSource kind: {kind!r}")


@dataclass
class PromSLOGroup:
    """All SLOs of one spec document plus where they came from."""

    slos: list[PromSLO]
    original_source: OriginalSource

    def to_dict(self) -> dict[str, Any]:
        return {
            "SLOs": [slo.to_dict() for slo in self.slos],
            "OriginalSource": self.original_source.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PromSLOGroup:
        return cls(
            slos=[PromSLO.from_dict(s) for s in data.get("SLOs") or []],
            original_source=original_source_from_dict(data["OriginalSource"]),
        )


@dataclass
class Rule:
    """A Prometheus recording (``record``) or alerting (``alert``) rule."""

    expr: str
    record: str = ""
    alert: str = ""
    for_: str = ""
    labels: dict[str, str] = field(default_factory=dict)
    annotations: dict[str, str] = field(default_factory=dict)

    def to_prometheus(self) -> dict[str, Any]:
        """Convert to Prometheus rule file format."""
        rule: dict[str, Any] = {}
        if self.record:
            rule["record"] = self.record
        if self.alert:
            rule["alert"] = self.alert
        rule["expr"] = self.expr
        if self.for_:
            rule["for"] = self.for_
        if self.labels:
            rule["labels"] = dict(self.labels)
        if self.annotations:
            rule["annotations"] = dict(self.annotations)
        return rule

    def to_dict(self) -> dict[str, Any]:
        return {
            "Record": self.record,
            "Alert": self.alert,
            "Expr": self.expr,
            "For": self.for_,
            "Labels": dict(self.labels),
            "Annotations": dict(self.annotations),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Rule:
        return cls(
            record=data.get("Record", ""),
            alert=data.get("Alert", ""),
            expr=data["Expr"],
            for_=data.get("For", ""),
            labels=_str_map(data.get("Labels")),
            annotations=_str_map(data.get("Annotations")),
        )


@dataclass
class SLOPrometheusRules:
    """Rules generated for one SLO."""

    sli_error_rec_rules: list[Rule] = field(default_factory=list)
    metadata_rec_rules: list[Rule] = field(default_factory=list)
    alert_rules: list[Rule] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "SLIErrorRecRules": [r.to_dict() for r in self.sli_error_rec_rules],
            "MetadataRecRules": [r.to_dict() for r in self.metadata_rec_rules],
            "AlertRules": [r.to_dict() for r in self.alert_rules],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SLOPrometheusRules:
        return cls(
            sli_error_rec_rules=[Rule.from_dict(r) for r in data.get("SLIErrorRecRules") or []],
            metadata_rec_rules=[Rule.from_dict(r) for r in data.get("MetadataRecRules") or []],
            alert_rules=[Rule.from_dict(r) for r in data.get("AlertRules") or []],
        )


@dataclass
class SLOResult:
    slo: PromSLO
    prometheus_rules: SLOPrometheusRules

    def to_dict(self) -> dict[str, Any]:
        return {"SLO": self.slo.to_dict(), "PrometheusRules": self.prometheus_rules.to_dict()}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SLOResult:
        return cls(
            slo=PromSLO.from_dict(data["SLO"]),
            prometheus_rules=SLOPrometheusRules.from_dict(data["PrometheusRules"]),
        )


@dataclass
class SLOGroupResult:
    slo_group: PromSLOGroup
    slo_results: list[SLOResult] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "SLOGroup": self.slo_group.to_dict(),
            "SLOResults": [r.to_dict() for r in self.slo_results],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SLOGroupResult:
        return cls(
            slo_group=PromSLOGroup.from_dict(data["SLOGroup"]),
            slo_results=[SLOResult.from_dict(r) for r in data.get("SLOResults") or []],
        )


@dataclass
class GenerationResult:
    """Complete output of one spec compilation."""

    result: SLOGroupResult

    @property
    def original_source(self) -> OriginalSource:
        return self.result.slo_group.original_source

    def to_dict(self) -> dict[str, Any]:
        return {"Result": self.result.to_dict()}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> GenerationResult:
        return cls(result=SLOGroupResult.from_dict(data["Result"]))
