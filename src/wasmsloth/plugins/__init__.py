"""SLI plugin loading.

Plugins are Python source modules read through a ``ModuleSource`` so they
can come from memory (the boundary extension argument) or anywhere else.
"""

from wasmsloth.plugins.loader import (
    SLI_PLUGIN_VERSION,
    PluginLoadError,
    PluginRegistry,
    SLIPlugin,
    build_plugin_registry,
    load_sli_plugin,
)
from wasmsloth.plugins.source import InMemoryModuleSource, ModuleSource

__all__ = [
    "SLI_PLUGIN_VERSION",
    "InMemoryModuleSource",
    "ModuleSource",
    "PluginLoadError",
    "PluginRegistry",
    "SLIPlugin",
    "build_plugin_registry",
    "load_sli_plugin",
]
