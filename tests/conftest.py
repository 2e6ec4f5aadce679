"""Root test configuration."""

import logging

import pytest
import structlog

GENERIC_SPEC = """
version: "prometheus/v1"
service: "myservice"
labels:
  owner: "myteam"
  repo: "myorg/myservice"
slos:
  - name: "requests-availability"
    objective: 99.9
    description: "Common SLO based on availability for HTTP request responses."
    sli:
      events:
        error_query: 'sum(rate(http_request_duration_seconds_count{job="myservice",code=~"(5..|429)"}[{{.window}}]))'
        total_query: 'sum(rate(http_request_duration_seconds_count{job="myservice"}[{{.window}}]))'
    alerting:
      name: MyServiceHighErrorRate
      labels:
        category: "availability"
      annotations:
        summary: "High error rate on 'myservice' requests responses"
      page_alert:
        labels:
          severity: pageteam
          routing_key: myteam
      ticket_alert:
        labels:
          severity: "slack"
          slack_channel: "#alerts-myteam"
"""

K8S_SPEC = """
apiVersion: sloth.slok.dev/v1
kind: PrometheusServiceLevel
metadata:
  name: svc-a
  namespace: ns1
  uid: 5f2c1f0e-0000-0000-0000-000000000000
  labels:
    team: payments
  annotations:
    owner: payments-oncall
spec:
  service: "svc-a"
  labels:
    owner: "payments"
  slos:
    - name: "requests-availability"
      objective: 99.5
      sli:
        events:
          errorQuery: 'sum(rate(http_requests_total{job="svc-a",code=~"5.."}[{{.window}}]))'
          totalQuery: 'sum(rate(http_requests_total{job="svc-a"}[{{.window}}]))'
      alerting:
        name: SvcAHighErrorRate
        pageAlert:
          labels:
            severity: critical
        ticketAlert:
          disable: true
"""

PLUGIN_SOURCE = '''
SLI_PLUGIN_VERSION = "prometheus/v1"
SLI_PLUGIN_ID = "test/availability"


def sli_plugin(meta, labels, options):
    job = options.get("job", meta["service"])
    query = (
        'sum(rate(http_requests_total{job="JOB",code=~"5.."}[{{.window}}]))'
        ' / '
        'sum(rate(http_requests_total{job="JOB"}[{{.window}}]))'
    )
    return query.replace("JOB", job)
'''

PLUGIN_SPEC = """
version: "prometheus/v1"
service: "myservice"
slos:
  - name: "plugin-availability"
    objective: 99.5
    sli:
      plugin:
        id: "test/availability"
        options:
          job: "api"
    alerting:
      name: PluginAvailability
"""


def pytest_configure(config):
    """Configure structlog for tests to suppress debug/info output."""
    logging.basicConfig(level=logging.WARNING, force=True)
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.processors.add_log_level,
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )


@pytest.fixture
def generic_spec():
    """A prometheus/v1 spec with one events based SLO."""
    return GENERIC_SPEC


@pytest.fixture
def k8s_spec():
    """A PrometheusServiceLevel object for svc-a in ns1."""
    return K8S_SPEC


@pytest.fixture
def plugin_source():
    """A valid SLI plugin module."""
    return PLUGIN_SOURCE


@pytest.fixture
def plugin_spec():
    """A prometheus/v1 spec using the test plugin."""
    return PLUGIN_SPEC
