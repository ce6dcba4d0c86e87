"""Named-event publish/subscribe used for robot, adapter and brain lifecycle.

Handlers may be plain callables or coroutine functions. ``emit`` runs
them one at a time in registration order, awaiting coroutine results
before moving on, so ordering is the same as a synchronous emitter.
"""

import inspect
from collections import defaultdict
from typing import Any, Callable, Dict, List

import structlog

logger = structlog.get_logger("rubo.events")

EventHandler = Callable[..., Any]


class EventEmitter:
    """Registry of handlers keyed by event name."""

    def __init__(self):
        self._handlers: Dict[str, List[EventHandler]] = defaultdict(list)

    def on(self, event: str, handler: EventHandler) -> EventHandler:
        """Register ``handler`` for every future ``event``."""
        self._handlers[event].append(handler)
        return handler

    def once(self, event: str, handler: EventHandler) -> EventHandler:
        """Register ``handler`` for the next ``event`` only.

        Returns the wrapper actually stored, which can be passed to
        ``remove_listener`` to cancel it before it fires.
        """
        fired = False

        async def wrapper(*args: Any) -> None:
            nonlocal fired
            # a re-entrant emit may still hold this wrapper in its snapshot
            if fired:
                return
            fired = True
            self.remove_listener(event, wrapper)
            result = handler(*args)
            if inspect.isawaitable(result):
                await result

        self._handlers[event].append(wrapper)
        return wrapper

    def remove_listener(self, event: str, handler: EventHandler) -> None:
        handlers = self._handlers.get(event)
        if handlers and handler in handlers:
            handlers.remove(handler)

    def listeners(self, event: str) -> List[EventHandler]:
        return list(self._handlers.get(event, ()))

    async def emit(self, event: str, *args: Any) -> None:
        """Invoke every handler registered for ``event`` with ``args``.

        The handler list is copied before the first call, so handlers
        added or removed while emitting (including by nested emits) only
        take effect on the next emit. A raising handler does not stop
        the others; once all have run, the first failure is re-raised.
        """
        failures: List[BaseException] = []
        for handler in list(self._handlers.get(event, ())):
            try:
                result = handler(*args)
                if inspect.isawaitable(result):
                    await result
            except Exception as e:
                failures.append(e)

        if not failures:
            return
        for extra in failures[1:]:
            logger.error(
                "event_handler_failed",
                event_name=event,
                error=str(extra),
                error_type=type(extra).__name__,
            )
        raise failures[0]
