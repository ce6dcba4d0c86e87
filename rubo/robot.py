"""Robot: receives messages from an adapter and dispatches them to listeners.

Listeners are evaluated in registration order for every inbound message.
A listener can claim a message exclusively by calling ``finish()``; a
message nobody handled is dispatched once more wrapped in a
CatchAllMessage. Exceptions raised by listeners are turned into ``error``
events and never reach the adapter.

Key classes:
    Robot: Owns the adapter, brain, listeners, error handlers and
        command help, and runs the dispatch loop.
"""

import inspect
from typing import Any, Callable, List, Optional, Set, Tuple

import structlog

from . import adapters
from .adapters.base import Adapter
from .brain import Brain
from .commands import CommandRegistry
from .event_emitter import EventEmitter
from .listener import Handler, Listener, Matcher, TextListener
from .message import CatchAllMessage, Message, MessageKind
from .pattern import PatternLike, build_respond_pattern, compile_pattern, is_anchored
from .plugins import plugin_source, resolve
from .response import Envelope, Response

ErrorHandler = Callable[[BaseException, Response], Any]

DEFAULT_NAME = "Rubo"


class Robot:
    """Chat robot bound to one adapter.

    Every ``hear``/``respond``/``enter``/... method can be called with a
    handler or used as a decorator::

        @robot.respond(r"PING$", re.IGNORECASE)
        async def ping(res):
            await res.send("PONG")

    Args:
        adapter_name: Registered adapter name (see ``rubo.adapters``).
        name: Name the robot answers to in ``respond`` listeners.
        alias: Optional alternative prefix for ``respond`` listeners.
        logger: structlog-style logger; defaults to ``rubo.robot``.
    """

    def __init__(
        self,
        adapter_name: str = "shell",
        name: str = DEFAULT_NAME,
        alias: Optional[str] = None,
        logger: Any = None,
    ):
        self.name = name
        self.alias = alias
        self.logger = logger or structlog.get_logger("rubo.robot")
        self.events = EventEmitter()
        self.brain = Brain(self)
        self.response_class = Response
        self._commands = CommandRegistry()
        self._listeners: List[Listener] = []
        self._error_handlers: List[ErrorHandler] = []
        self._parsed_modules: Set[str] = set()
        self._loaded_plugins: Set[str] = set()
        self.adapter: Adapter = self._load_adapter(adapter_name)
        self.events.on("error", self._invoke_error_handlers)

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    @property
    def listeners(self) -> Tuple[Listener, ...]:
        return tuple(self._listeners)

    @property
    def error_handlers(self) -> Tuple[ErrorHandler, ...]:
        return tuple(self._error_handlers)

    @property
    def commands(self) -> List[str]:
        """Command help lines, sorted, duplicates kept."""
        return self._commands.commands

    @property
    def command_registry(self) -> CommandRegistry:
        return self._commands

    def add_commands(self, text: str) -> None:
        """Add each non-blank line of ``text`` as a command help entry."""
        self._commands.add_block(text)

    def _add(self, make_listener: Callable[[Handler], Listener], callback):
        def register(cb: Handler) -> Handler:
            self._listeners.append(make_listener(cb))
            return cb

        if callback is None:
            return register
        return register(callback)

    def listen(self, matcher: Matcher, callback: Optional[Handler] = None):
        """Add a listener with an arbitrary predicate over messages."""
        return self._add(lambda cb: Listener(self, matcher, cb), callback)

    def hear(
        self,
        pattern: PatternLike,
        callback: Optional[Handler] = None,
        flags: int = 0,
    ):
        """Add a listener for any text message matching ``pattern``."""
        regex = compile_pattern(pattern, flags)
        return self._add(lambda cb: TextListener(self, regex, cb), callback)

    def respond(
        self,
        pattern: PatternLike,
        callback: Optional[Handler] = None,
        flags: int = 0,
    ):
        """Add a listener for text addressed to the robot.

        The pattern is matched right after the robot's name or alias,
        so it behaves as if it started with ``^``. The prefix is fixed
        when the listener is added; set ``alias`` beforehand.
        """
        regex = compile_pattern(pattern, flags)
        if is_anchored(regex):
            self.logger.warning(
                "respond_anchor_misuse",
                msg="Anchors don't work well with respond, perhaps you want to use 'hear'",
                pattern=regex.pattern,
            )
        wrapped = build_respond_pattern(self.name, self.alias, regex)
        return self._add(
            lambda cb: TextListener(self, wrapped, cb, description=regex.pattern),
            callback,
        )

    def enter(self, callback: Optional[Handler] = None):
        """Add a listener for users entering a room."""
        return self.listen(lambda m: m.kind is MessageKind.ENTER, callback)

    def leave(self, callback: Optional[Handler] = None):
        """Add a listener for users leaving a room."""
        return self.listen(lambda m: m.kind is MessageKind.LEAVE, callback)

    def topic(self, callback: Optional[Handler] = None):
        """Add a listener for room topic changes."""
        return self.listen(lambda m: m.kind is MessageKind.TOPIC, callback)

    def catch_all(self, callback: Optional[Handler] = None):
        """Add a listener for messages no other listener handled.

        The handler's ``response.message`` is the original message,
        not the CatchAllMessage wrapper.
        """
        def make_listener(cb: Handler) -> Listener:
            async def unwrap(response: Response) -> None:
                wrapper = response.message
                original = wrapper.message
                response.message = original
                try:
                    result = cb(response)
                    if inspect.isawaitable(result):
                        await result
                finally:
                    # finish() lands on the original; the loop checks the wrapper.
                    wrapper.done = wrapper.done or original.done

            return Listener(
                self,
                lambda m: m.kind is MessageKind.CATCH_ALL,
                unwrap,
                description=getattr(cb, "__name__", "catch_all"),
            )

        return self._add(make_listener, callback)

    def error(self, callback: Optional[ErrorHandler] = None):
        """Add a handler called with ``(exception, response)`` on errors."""
        def register(cb: ErrorHandler) -> ErrorHandler:
            self._error_handlers.append(cb)
            return cb

        if callback is None:
            return register
        return register(callback)

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    async def receive(self, message: Message) -> None:
        """Pass ``message`` to every interested listener, in order.

        Stops early once a handler marks the message done. If no
        listener handled a non-CatchAll message, it is dispatched once
        more wrapped in a CatchAllMessage.
        """
        results: List[bool] = []
        for listener in self._listeners:
            try:
                results.append(await listener.call(message))
            except Exception as e:
                self.logger.error(
                    "listener_failed",
                    listener=repr(listener),
                    error=str(e),
                    error_type=type(e).__name__,
                    exc_info=True,
                )
                await self._emit_error(e, self.response_class(self, message, None))
            if message.done:
                break

        if not isinstance(message, CatchAllMessage) and not any(results):
            await self.receive(CatchAllMessage(message))

    async def _emit_error(self, error: BaseException, response: Response) -> None:
        try:
            await self.events.emit("error", error, response)
        except Exception as e:
            self.logger.error(
                "error_event_failed",
                error=str(e),
                error_type=type(e).__name__,
            )

    async def _invoke_error_handlers(
        self, error: BaseException, response: Response
    ) -> None:
        for handler in list(self._error_handlers):
            try:
                result = handler(error, response)
                if inspect.isawaitable(result):
                    await result
            except Exception as e:
                self.logger.error(
                    "error_handler_failed",
                    handler=getattr(handler, "__name__", repr(handler)),
                    error=str(e),
                    error_type=type(e).__name__,
                    exc_info=True,
                )

    # ------------------------------------------------------------------
    # Plugins
    # ------------------------------------------------------------------

    def load_plugin(self, entry: str) -> None:
        """Load one plugin by registered name or module path.

        Any failure is fatal: it is logged and the process exits with
        status 1, so the robot never runs with a half-loaded plugin set.
        """
        self.logger.debug("plugin_loading", plugin=entry)
        try:
            for name, plugin in resolve(entry):
                if name in self._loaded_plugins:
                    self.logger.warning("plugin_already_loaded", plugin=name, entry=entry)
                    continue
                plugin(self)
                self._loaded_plugins.add(name)
                self._parse_help(plugin)
                self.logger.debug("plugin_loaded", plugin=name)
        except Exception as e:
            self.logger.error(
                "plugin_load_failed",
                plugin=entry,
                error=str(e),
                error_type=type(e).__name__,
                exc_info=True,
            )
            raise SystemExit(1) from e

    def load_plugins(self, *entries: str) -> None:
        for entry in entries:
            self.load_plugin(entry)

    def _parse_help(self, plugin) -> None:
        module = getattr(plugin, "__module__", None)
        if module in self._parsed_modules:
            return
        if module:
            self._parsed_modules.add(module)
        source = plugin_source(plugin)
        if source:
            self._commands.add_from_source(source)

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    def _load_adapter(self, adapter_name: str) -> Adapter:
        self.logger.debug("adapter_loading", adapter=adapter_name)
        try:
            return adapters.use(adapter_name, self)
        except Exception as e:
            self.logger.error(
                "adapter_load_failed",
                adapter=adapter_name,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise SystemExit(1) from e

    async def send(self, envelope: Envelope, *strings: str) -> None:
        await self.adapter.send(envelope, *strings)

    async def reply(self, envelope: Envelope, *strings: str) -> None:
        await self.adapter.reply(envelope, *strings)

    async def message_room(self, room: str, *strings: str) -> None:
        """Post ``strings`` to ``room`` without an inbound message."""
        await self.adapter.send(Envelope(room=room), *strings)

    async def run(self) -> None:
        """Emit ``running`` and hand control to the adapter's event loop."""
        await self.events.emit("running")
        await self.adapter.run()

    async def shutdown(self) -> None:
        """Close the adapter, then the brain."""
        await self.adapter.close()
        await self.brain.close()
