"""Static plugin registration table.

A plugin is a plain function taking the robot. It registers itself by
name with the ``register`` decorator when its module is imported::

    from rubo.plugins import register

    @register("ping")
    def ping(robot):
        ...

Configuration lists plugins either by registered name or by module
path; module paths are imported with ``importlib`` and must register at
least one plugin. Plugin source is never read from arbitrary files.
"""

import importlib
import inspect
from typing import TYPE_CHECKING, Callable, Dict, List, Optional, Tuple

from ..exceptions import PluginLoadError

if TYPE_CHECKING:
    from ..robot import Robot

Plugin = Callable[["Robot"], None]

PLUGINS: Dict[str, Plugin] = {}


def register(name: str) -> Callable[[Plugin], Plugin]:
    """Decorator adding a plugin function to ``PLUGINS`` under ``name``."""
    def decorator(plugin: Plugin) -> Plugin:
        PLUGINS[name] = plugin
        return plugin
    return decorator


def plugins_in_module(module_name: str) -> List[Tuple[str, Plugin]]:
    return [
        (name, plugin) for name, plugin in PLUGINS.items()
        if getattr(plugin, "__module__", None) == module_name
    ]


def resolve(entry: str) -> List[Tuple[str, Plugin]]:
    """Turn a configured plugin entry into ``(name, plugin)`` pairs.

    Args:
        entry: A registered plugin name, or a dotted module path whose
            import registers one or more plugins.

    Raises:
        PluginLoadError: Unknown name, failed import, or a module that
            registered nothing.
    """
    if entry in PLUGINS:
        return [(entry, PLUGINS[entry])]
    if "." not in entry:
        raise PluginLoadError(f"Unknown plugin {entry!r}", plugin=entry)
    try:
        importlib.import_module(entry)
    except ImportError as e:
        raise PluginLoadError(f"Cannot import plugin module: {e}", plugin=entry) from e
    found = plugins_in_module(entry)
    if not found:
        raise PluginLoadError("Module registers no plugins", plugin=entry)
    return found


def plugin_source(plugin: Plugin) -> Optional[str]:
    """Source of the module defining ``plugin``, if it can be read."""
    module = inspect.getmodule(plugin)
    if module is None:
        return None
    try:
        return inspect.getsource(module)
    except (OSError, TypeError):
        return None


__all__ = ["PLUGINS", "Plugin", "plugin_source", "register", "resolve"]
