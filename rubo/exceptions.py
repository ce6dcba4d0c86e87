"""Exception hierarchy for rubo.

Startup failures (unknown adapter, broken plugin) are the only errors
that end the process. Everything raised while dispatching a message is
caught by the robot and routed to the error-handler chain instead.
"""

from typing import Any, Optional


class RuboError(Exception):
    """Base exception for all rubo errors.

    Attributes:
        message: Human-readable error description.
        module: Originating module name (e.g. "adapters").
        context: Arbitrary key-value pairs for structured logging.
    """

    def __init__(
        self,
        message: str = "",
        *,
        module: Optional[str] = None,
        **context: Any,
    ) -> None:
        self.message = message
        self.module = module
        self.context = context
        super().__init__(message)

    def __str__(self) -> str:
        parts = [self.message or self.__class__.__name__]
        if self.module:
            parts.append(f"[module={self.module}]")
        if self.context:
            ctx = ", ".join(f"{k}={v}" for k, v in self.context.items())
            parts.append(f"({ctx})")
        return " ".join(parts)

    def __repr__(self) -> str:
        cls = self.__class__.__name__
        return f"{cls}({self.message!r}, module={self.module!r})"


class AdapterNotFoundError(RuboError):
    """No adapter is registered under the requested name.

    Attributes:
        adapter: The name that was looked up.
    """

    def __init__(self, adapter: str, **context: Any) -> None:
        self.adapter = adapter
        super().__init__(
            f"Cannot load adapter {adapter!r}",
            module="adapters",
            **context,
        )


class PluginLoadError(RuboError):
    """A plugin could not be imported or failed during registration.

    Attributes:
        plugin: Plugin name or module path.
    """

    def __init__(
        self,
        message: str = "",
        *,
        plugin: Optional[str] = None,
        **context: Any,
    ) -> None:
        self.plugin = plugin
        super().__init__(message, module="plugins", **context)
