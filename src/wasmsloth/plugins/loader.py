"""
SLI plugin loading.

A plugin module must define::

    SLI_PLUGIN_VERSION = "prometheus/v1"
    SLI_PLUGIN_ID = "my-org/availability"

    def sli_plugin(meta, labels, options):
        return 'sum(rate(errors[{{.window}}])) / sum(rate(total[{{.window}}]))'

``sli_plugin`` returns a raw error ratio query that still contains the
``{{.window}}`` template variable.
"""

from __future__ import annotations

import importlib.abc
import importlib.util
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from types import CodeType, MappingProxyType, ModuleType
from typing import Callable

import structlog

from wasmsloth.plugins.source import ModuleSource

logger = structlog.get_logger()

SLI_PLUGIN_VERSION = "prometheus/v1"

SLIPluginFunc = Callable[[Mapping[str, str], Mapping[str, str], Mapping[str, str]], str]


class PluginLoadError(Exception):
    """Raised when plugin source cannot be executed or breaks the plugin contract."""

    def __init__(self, module: str, reason: str):
        super().__init__(f"invalid SLI plugin {module}: {reason}")
        self.module = module
        self.reason = reason


@dataclass(frozen=True)
class SLIPlugin:
    """A loaded SLI plugin."""

    id: str
    version: str
    func: SLIPluginFunc
    module: str

    def __call__(
        self,
        meta: Mapping[str, str],
        labels: Mapping[str, str],
        options: Mapping[str, str],
    ) -> str:
        return self.func(meta, labels, options)


class PluginSourceLoader(importlib.abc.InspectLoader):
    """Import loader for a plugin module held as source text.

    The module is never added to ``sys.modules``; every load gets a fresh
    module object.
    """

    def __init__(self, module: str, source: str) -> None:
        self.module = module
        self.source = source
        self._code: CodeType | None = None

    def get_source(self, fullname: str) -> str:
        return self.source

    def get_code(self, fullname: str) -> CodeType:
        if self._code is None:
            self._code = self.source_to_code(self.source, self.module)
        return self._code

    def is_package(self, fullname: str) -> bool:
        return False

    def exec_module(self, module: ModuleType) -> None:
        module.__file__ = self.module
        super().exec_module(module)


def load_sli_plugin(module: str, source: str) -> SLIPlugin:
    """
    Import plugin source as a fresh module and check its contract.

    Args:
        module: Module name (used as filename in tracebacks)
        source: Python source text

    Returns:
        SLIPlugin

    Raises:
        PluginLoadError: If the source does not compile, fails on import or
            does not define the plugin attributes
    """
    loader = PluginSourceLoader(module, source)
    name = module.removesuffix(".py") or "plugin"

    try:
        loader.get_code(name)
    except (SyntaxError, ValueError) as exc:
        raise PluginLoadError(module, f"could not compile: {exc}") from exc

    spec = importlib.util.spec_from_loader(name, loader, origin=module)
    assert spec is not None
    namespace = importlib.util.module_from_spec(spec)
    try:
        loader.exec_module(namespace)
    except SystemExit as exc:
        raise PluginLoadError(module, f"exited while loading (code {exc.code})") from exc
    except Exception as exc:
        raise PluginLoadError(module, f"error while loading: {exc}") from exc

    version = getattr(namespace, "SLI_PLUGIN_VERSION", None)
    if version != SLI_PLUGIN_VERSION:
        raise PluginLoadError(
            module,
            f"unsupported SLI_PLUGIN_VERSION {version!r}, expected {SLI_PLUGIN_VERSION!r}",
        )

    plugin_id = getattr(namespace, "SLI_PLUGIN_ID", None)
    if not isinstance(plugin_id, str) or not plugin_id.strip():
        raise PluginLoadError(module, "SLI_PLUGIN_ID must be a non-empty string")

    func = getattr(namespace, "sli_plugin", None)
    if not callable(func):
        raise PluginLoadError(module, "missing callable sli_plugin(meta, labels, options)")

    return SLIPlugin(id=plugin_id, version=version, func=func, module=module)


class PluginRegistry:
    """Read-only registry of SLI plugins keyed by plugin ID."""

    def __init__(self, plugins: Iterable[SLIPlugin] = ()) -> None:
        by_id: dict[str, SLIPlugin] = {}
        for plugin in plugins:
            if plugin.id in by_id:
                raise PluginLoadError(
                    plugin.module,
                    f"duplicated SLI plugin ID '{plugin.id}' (already loaded from "
                    f"{by_id[plugin.id].module})",
                )
            by_id[plugin.id] = plugin
        self._plugins = MappingProxyType(by_id)

    def get(self, plugin_id: str) -> SLIPlugin | None:
        return self._plugins.get(plugin_id)

    def ids(self) -> list[str]:
        return sorted(self._plugins)

    def __contains__(self, plugin_id: object) -> bool:
        return plugin_id in self._plugins

    def __len__(self) -> int:
        return len(self._plugins)


def build_plugin_registry(sources: Iterable[ModuleSource], *, strict: bool) -> PluginRegistry:
    """
    Load every ``.py`` module from the given sources into a registry.

    Args:
        sources: Module sources to scan
        strict: If True, the first broken plugin raises; otherwise it is
            logged and skipped

    Raises:
        PluginLoadError: In strict mode, for any broken or duplicated plugin
    """
    plugins: list[SLIPlugin] = []
    seen: set[str] = set()

    for source in sources:
        for name in source.names():
            if not name.endswith(".py"):
                continue
            try:
                plugin = load_sli_plugin(name, source.read(name))
                if plugin.id in seen:
                    raise PluginLoadError(name, f"duplicated SLI plugin ID '{plugin.id}'")
            except PluginLoadError as exc:
                if strict:
                    raise
                logger.warning("sli_plugin_skipped", module=name, reason=exc.reason)
                continue

            seen.add(plugin.id)
            plugins.append(plugin)
            logger.debug("sli_plugin_loaded", module=name, plugin_id=plugin.id)

    return PluginRegistry(plugins)
