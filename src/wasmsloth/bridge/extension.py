"""Extension loader: turns extension source text into a module source."""

from __future__ import annotations

from wasmsloth.config import get_settings
from wasmsloth.plugins.source import InMemoryModuleSource


def plugin_module_name() -> str:
    return get_settings().plugin_module_name


def load_extension(source: str) -> InMemoryModuleSource | None:
    """
    Wrap extension source text in an in-memory module source.

    No validation happens here; broken source is reported when the
    generator loads it.

    Args:
        source: Extension source text, possibly empty

    Returns:
        Module source with a single ``plugin.py`` entry, or None when the
        text is empty
    """
    if not source:
        return None
    return InMemoryModuleSource({plugin_module_name(): source})
