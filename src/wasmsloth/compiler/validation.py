"""
SLO validation.

Checks run after parsing and before rule generation. Validators return
lists of error strings (empty when valid) so every problem in a spec is
reported at once.
"""

from __future__ import annotations

import re

from wasmsloth.compiler.model import AlertMeta, PromSLO, PromSLOGroup
from wasmsloth.compiler.template import has_window_var, render_window

SLO_NAME_PATTERN = re.compile(r"^[a-zA-Z0-9][a-zA-Z0-9_.-]*$")
LABEL_NAME_PATTERN = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*$")
METRIC_NAME_PATTERN = re.compile(r"^[a-zA-Z_:][a-zA-Z0-9_:]*$")

_PAIRS = {")": "(", "]": "[", "}": "{"}


def check_query_syntax(query: str) -> str | None:
    """
    Cheap structural PromQL check: balanced brackets and closed string literals.

    Returns:
        Error description, or None if the query looks well formed
    """
    stack: list[str] = []
    quote: str | None = None
    escaped = False

    for char in query:
        if quote:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == quote:
                quote = None
            continue
        if char in ("'", '"', "`"):
            quote = char
        elif char in "([{":
            stack.append(char)
        elif char in _PAIRS:
            if not stack or stack[-1] != _PAIRS[char]:
                return f"unexpected '{char}'"
            stack.pop()

    if quote:
        return "unterminated string literal"
    if stack:
        return f"unclosed '{stack[-1]}'"
    return None


def _validate_query(field_name: str, query: str) -> list[str]:
    if not query.strip():
        return [f"{field_name} cannot be empty"]
    errors = []
    if not has_window_var(query):
        errors.append(f"{field_name} must use the {{{{.window}}}} template variable")
    problem = check_query_syntax(render_window(query, "5m"))
    if problem:
        errors.append(f"{field_name} is not valid PromQL: {problem}")
    return errors


def _validate_labels(field_name: str, labels: dict[str, str]) -> list[str]:
    return [
        f"{field_name} has invalid label name '{name}'"
        for name in labels
        if not LABEL_NAME_PATTERN.match(name)
    ]


def _alert_enabled(meta: AlertMeta) -> bool:
    return not meta.disable


def validate_slo(slo: PromSLO) -> list[str]:
    """
    Validate a single SLO.

    Args:
        slo: SLO to validate

    Returns:
        List of validation errors (empty if valid)
    """
    errors: list[str] = []

    if not SLO_NAME_PATTERN.match(slo.name):
        errors.append(f"invalid SLO name '{slo.name}'")

    if not (0.0 < slo.objective <= 100.0):
        errors.append(f"invalid objective {slo.objective}, must be > 0 and <= 100")

    kinds = slo.sli.kinds()
    if len(kinds) != 1:
        errors.append(
            "SLI must define exactly one of events, raw or plugin"
            + (f" (got {', '.join(kinds)})" if kinds else "")
        )
    elif slo.sli.events:
        errors.extend(_validate_query("SLI error query", slo.sli.events.error_query))
        errors.extend(_validate_query("SLI total query", slo.sli.events.total_query))
    elif slo.sli.raw:
        errors.extend(_validate_query("SLI error ratio query", slo.sli.raw.error_ratio_query))
    elif slo.sli.plugin and not slo.sli.plugin.id.strip():
        errors.append("SLI plugin ID cannot be empty")

    errors.extend(_validate_labels("SLO labels", slo.labels))
    errors.extend(_validate_labels("alerting labels", slo.alert_labels))
    errors.extend(_validate_labels("page alert labels", slo.page_alert_meta.labels))
    errors.extend(_validate_labels("ticket alert labels", slo.ticket_alert_meta.labels))

    if _alert_enabled(slo.page_alert_meta) or _alert_enabled(slo.ticket_alert_meta):
        if not slo.alert_name:
            errors.append("alerting name is required when page or ticket alerts are enabled")
        elif not METRIC_NAME_PATTERN.match(slo.alert_name):
            errors.append(f"invalid alert name '{slo.alert_name}'")

    return [f"slo {slo.name!r}: {e}" for e in errors]


def validate_slo_group(group: PromSLOGroup) -> list[str]:
    """Validate every SLO of a group plus group-wide constraints."""
    errors: list[str] = []

    if not group.slos:
        errors.append("at least one SLO is required")

    seen: set[str] = set()
    for slo in group.slos:
        if not slo.service.strip():
            errors.append(f"slo {slo.name!r}: service name cannot be empty")
        if slo.id in seen:
            errors.append(f"slo {slo.name!r}: duplicated SLO ID '{slo.id}'")
        seen.add(slo.id)
        errors.extend(validate_slo(slo))

    return errors
