"""Query template rendering.

SLI queries use Go-template style variables, e.g.::

    sum(rate(http_requests_total{code=~"5.."}[{{.window}}]))

Only plain variable references (``{{.name}}`` with optional inner spaces)
are supported.
"""

import re
from collections.abc import Mapping

TEMPLATE_VAR = re.compile(r"\{\{\s*\.(\w+)\s*\}\}")

WINDOW_VAR = "window"


class QueryTemplate:
    """A query with ``{{.var}}`` placeholders."""

    def __init__(self, text: str):
        self.text = text

    @property
    def variables(self) -> set[str]:
        return set(TEMPLATE_VAR.findall(self.text))

    def render(self, variables: Mapping[str, str]) -> str:
        """Substitute variables.

        Unknown variables are left in place so validation can report them.

        Example:
            >>> QueryTemplate("rate(x[{{.window}}])").render({"window": "5m"})
            'rate(x[5m])'
        """

        def replace_var(match: re.Match[str]) -> str:
            return variables.get(match.group(1), match.group(0))

        return TEMPLATE_VAR.sub(replace_var, self.text)


def render_window(query: str, window: str) -> str:
    """Render a query for a single window.

    Example:
        >>> render_window("sum(rate(x[{{ .window }}]))", "1h")
        'sum(rate(x[1h]))'
    """
    variables: dict[str, str] = {WINDOW_VAR: window}
    return QueryTemplate(query).render(variables)


def has_window_var(query: str) -> bool:
    return WINDOW_VAR in QueryTemplate(query).variables
