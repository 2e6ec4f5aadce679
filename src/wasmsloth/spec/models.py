"""
Schemas of the accepted SLO spec documents.

Two document types are supported:

- ``version: prometheus/v1``: plain Sloth spec, snake_case keys
- ``apiVersion: sloth.slok.dev/v1`` / ``kind: PrometheusServiceLevel``:
  Kubernetes custom resource, camelCase keys
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

PROMETHEUS_V1_VERSION = "prometheus/v1"
K8S_API_VERSION = "sloth.slok.dev/v1"
K8S_KIND = "PrometheusServiceLevel"


class SpecModel(BaseModel):
    """Base for prometheus/v1 spec sections."""

    model_config = ConfigDict(extra="forbid", coerce_numbers_to_str=True)


class AlertSpec(SpecModel):
    disable: bool = False
    labels: dict[str, str] = Field(default_factory=dict)
    annotations: dict[str, str] = Field(default_factory=dict)


class AlertingSpec(SpecModel):
    name: str = ""
    labels: dict[str, str] = Field(default_factory=dict)
    annotations: dict[str, str] = Field(default_factory=dict)
    page_alert: AlertSpec = Field(default_factory=AlertSpec)
    ticket_alert: AlertSpec = Field(default_factory=AlertSpec)


class EventsSpec(SpecModel):
    error_query: str
    total_query: str


class RawSpec(SpecModel):
    error_ratio_query: str


class PluginSpec(SpecModel):
    id: str
    options: dict[str, str] = Field(default_factory=dict)


class SLISpec(SpecModel):
    events: EventsSpec | None = None
    raw: RawSpec | None = None
    plugin: PluginSpec | None = None


class SLOSpec(SpecModel):
    name: str
    objective: float
    description: str = ""
    labels: dict[str, str] = Field(default_factory=dict)
    sli: SLISpec
    alerting: AlertingSpec = Field(default_factory=AlertingSpec)


class PrometheusSpec(SpecModel):
    """A ``prometheus/v1`` Sloth document."""

    version: Literal["prometheus/v1"]
    service: str
    labels: dict[str, str] = Field(default_factory=dict)
    slos: list[SLOSpec] = Field(default_factory=list)


class K8sSpecModel(BaseModel):
    """Base for PrometheusServiceLevel spec sections (camelCase keys)."""

    model_config = ConfigDict(
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=False,
        coerce_numbers_to_str=True,
    )


class K8sAlertSpec(K8sSpecModel):
    disable: bool = False
    labels: dict[str, str] = Field(default_factory=dict)
    annotations: dict[str, str] = Field(default_factory=dict)


class K8sAlertingSpec(K8sSpecModel):
    name: str = ""
    labels: dict[str, str] = Field(default_factory=dict)
    annotations: dict[str, str] = Field(default_factory=dict)
    page_alert: K8sAlertSpec = Field(default_factory=K8sAlertSpec)
    ticket_alert: K8sAlertSpec = Field(default_factory=K8sAlertSpec)


class K8sEventsSpec(K8sSpecModel):
    error_query: str
    total_query: str


class K8sRawSpec(K8sSpecModel):
    error_ratio_query: str


class K8sPluginSpec(K8sSpecModel):
    id: str
    options: dict[str, str] = Field(default_factory=dict)


class K8sSLISpec(K8sSpecModel):
    events: K8sEventsSpec | None = None
    raw: K8sRawSpec | None = None
    plugin: K8sPluginSpec | None = None


class K8sSLOSpec(K8sSpecModel):
    name: str
    objective: float
    description: str = ""
    labels: dict[str, str] = Field(default_factory=dict)
    sli: K8sSLISpec
    alerting: K8sAlertingSpec = Field(default_factory=K8sAlertingSpec)


class K8sServiceLevelSpec(K8sSpecModel):
    service: str
    labels: dict[str, str] = Field(default_factory=dict)
    slos: list[K8sSLOSpec] = Field(default_factory=list)


class K8sObjectMeta(BaseModel):
    """Subset of Kubernetes ObjectMeta; other metadata fields are ignored."""

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    name: str
    namespace: str = ""
    labels: dict[str, str] = Field(default_factory=dict)
    annotations: dict[str, str] = Field(default_factory=dict)


class PrometheusServiceLevel(BaseModel):
    """A ``sloth.slok.dev/v1`` PrometheusServiceLevel object."""

    model_config = ConfigDict(extra="ignore")

    api_version: Literal["sloth.slok.dev/v1"] = Field(alias="apiVersion")
    kind: Literal["PrometheusServiceLevel"]
    metadata: K8sObjectMeta
    spec: K8sServiceLevelSpec
