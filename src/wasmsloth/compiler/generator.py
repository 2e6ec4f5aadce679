"""
Prometheus SLO generator.

Compiles a raw SLO spec into Sloth-compatible Prometheus rules.

Example:
    generator = PrometheusSLOGenerator(
        GeneratorConfig(extra_labels={"source": "wasm-sloth"})
    )
    result = generator.generate_from_raw(raw_yaml_bytes)
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType

import structlog

from wasmsloth.compiler.model import (
    GenerationResult,
    PromSLO,
    PromSLOGroup,
    SLIRaw,
    SLOGroupResult,
    SLOResult,
)
from wasmsloth.compiler.rules import SLORulesBuilder, merge_labels
from wasmsloth.compiler.template import has_window_var
from wasmsloth.compiler.validation import validate_slo_group
from wasmsloth.compiler.windows import parse_duration
from wasmsloth.core.errors import CompilationError, ConfigurationError
from wasmsloth.plugins.loader import PluginLoadError, PluginRegistry, build_plugin_registry
from wasmsloth.plugins.source import ModuleSource
from wasmsloth.spec.parser import parse_spec

logger = structlog.get_logger()


@dataclass(frozen=True)
class GeneratorConfig:
    """Immutable generator configuration."""

    extra_labels: Mapping[str, str] = field(default_factory=dict)
    plugin_sources: tuple[ModuleSource, ...] = ()
    strict_plugins: bool = False
    slo_period: str = "30d"
    version: str = ""

    def __post_init__(self) -> None:
        # Read-only after construction
        object.__setattr__(self, "extra_labels", MappingProxyType(dict(self.extra_labels)))
        object.__setattr__(self, "plugin_sources", tuple(self.plugin_sources))


class PrometheusSLOGenerator:
    """Generates Prometheus SLO rules from raw specs.

    Plugins are loaded once at construction; instances are read-only
    afterwards and can be shared between calls.
    """

    def __init__(self, config: GeneratorConfig):
        """
        Args:
            config: Generator configuration

        Raises:
            ConfigurationError: If the SLO period is invalid, or a plugin
                fails to load while ``strict_plugins`` is set
        """
        try:
            parse_duration(config.slo_period)
        except ValueError as exc:
            raise ConfigurationError(f"invalid SLO period: {exc}") from exc

        try:
            plugins = build_plugin_registry(config.plugin_sources, strict=config.strict_plugins)
        except PluginLoadError as exc:
            raise ConfigurationError(f"could not load SLI plugins: {exc}") from exc

        self._config = config
        self._plugins = plugins

    @property
    def config(self) -> GeneratorConfig:
        return self._config

    @property
    def plugins(self) -> PluginRegistry:
        return self._plugins

    def generate_from_raw(self, raw: bytes | str) -> GenerationResult:
        """
        Parse, validate and compile a raw spec.

        Raises:
            CompilationError: For malformed specs, validation failures and
                plugin resolution failures
        """
        group = parse_spec(raw, period=self._config.slo_period)
        return self.generate(group)

    def generate(self, group: PromSLOGroup) -> GenerationResult:
        """Compile an already parsed SLO group."""
        errors = validate_slo_group(group)
        if errors:
            raise CompilationError("invalid SLO group: " + "; ".join(errors))

        results: list[SLOResult] = []
        for slo in group.slos:
            compiled = self._prepare_slo(slo)
            builder = SLORulesBuilder(
                compiled,
                period=self._config.slo_period,
                extra_labels=self._config.extra_labels,
                version=self._config.version,
            )
            results.append(SLOResult(slo=compiled, prometheus_rules=builder.build()))

        compiled_group = PromSLOGroup(
            slos=[r.slo for r in results],
            original_source=group.original_source,
        )
        logger.debug(
            "slo_spec_compiled",
            slo_count=len(results),
            source=type(group.original_source).__name__,
        )
        return GenerationResult(
            result=SLOGroupResult(slo_group=compiled_group, slo_results=results)
        )

    def _prepare_slo(self, slo: PromSLO) -> PromSLO:
        """Apply extra labels and resolve plugin SLIs into raw queries."""
        labels = merge_labels(slo.labels, self._config.extra_labels)
        sli = slo.sli

        if sli.plugin is not None:
            query = self._run_plugin(slo)
            sli = replace(sli, raw=SLIRaw(error_ratio_query=query))

        return replace(slo, labels=labels, sli=sli)

    def _run_plugin(self, slo: PromSLO) -> str:
        assert slo.sli.plugin is not None
        plugin_id = slo.sli.plugin.id
        plugin = self._plugins.get(plugin_id)
        if plugin is None:
            raise CompilationError(f"slo {slo.name!r}: unknown SLI plugin '{plugin_id}'")

        meta = {
            "service": slo.service,
            "slo": slo.name,
            "objective": f"{slo.objective:g}",
        }
        try:
            query = plugin(meta, dict(slo.labels), dict(slo.sli.plugin.options))
        except SystemExit as exc:
            raise CompilationError(
                f"slo {slo.name!r}: SLI plugin '{plugin_id}' exited (code {exc.code})"
            ) from exc
        except Exception as exc:
            raise CompilationError(
                f"slo {slo.name!r}: SLI plugin '{plugin_id}' failed: {exc}"
            ) from exc

        if not isinstance(query, str) or not query.strip():
            raise CompilationError(
                f"slo {slo.name!r}: SLI plugin '{plugin_id}' returned an empty query"
            )
        if not has_window_var(query):
            raise CompilationError(
                f"slo {slo.name!r}: SLI plugin '{plugin_id}' query must use the "
                "{{.window}} template variable"
            )
        return query
