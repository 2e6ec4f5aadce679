"""
Generator factory.

Calls without an extension share one generator built at process start.
Calls with an extension always get a fresh generator with strict plugin
loading, so plugins never leak between calls.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any

import structlog

from wasmsloth.bridge.extension import load_extension
from wasmsloth.compiler.generator import GeneratorConfig, PrometheusSLOGenerator
from wasmsloth.config import get_settings

logger = structlog.get_logger()


def source_labels() -> dict[str, str]:
    """Identifying label attached to every generated rule."""
    settings = get_settings()
    return {settings.source_label_name: settings.source_label_value}


def build_generator(config: GeneratorConfig) -> PrometheusSLOGenerator:
    """
    Build a generator from a configuration.

    Raises:
        ConfigurationError: If the generator cannot be built
    """
    generator = PrometheusSLOGenerator(config)
    logger.debug(
        "slo_generator_built",
        plugin_sources=len(config.plugin_sources),
        plugins=generator.plugins.ids(),
        strict_plugins=config.strict_plugins,
    )
    return generator


def _base_config(**overrides: Any) -> GeneratorConfig:
    settings = get_settings()
    return GeneratorConfig(
        extra_labels=source_labels(),
        slo_period=settings.slo_period,
        version=settings.version,
        **overrides,
    )


@lru_cache(maxsize=1)
def default_generator() -> PrometheusSLOGenerator:
    """Shared generator without plugins (non-strict), built once."""
    return build_generator(_base_config())


def get_generator(plugin_source: str = "") -> PrometheusSLOGenerator:
    """
    Return the generator for one call.

    Args:
        plugin_source: Extension source text; empty selects the shared generator

    Raises:
        ConfigurationError: If the extension cannot be loaded
    """
    module_source = load_extension(plugin_source)
    if module_source is None:
        return default_generator()

    return build_generator(
        _base_config(plugin_sources=(module_source,), strict_plugins=True)
    )
