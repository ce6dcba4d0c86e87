"""Listeners pair a predicate over messages with a response handler.

The robot owns an ordered list of listeners and calls each one per
inbound message. Listeners do not guard against exceptions; the robot
does that so one broken plugin cannot stop dispatch.
"""

import inspect
from typing import TYPE_CHECKING, Any, Callable, Pattern

from .message import Message, MessageKind
from .response import Response

if TYPE_CHECKING:
    from .robot import Robot

# Predicate: sync (message) -> truthy value. Truthy non-bool results are
# handed to the Response as the match.
Matcher = Callable[[Message], Any]
# Handler: sync or async (response) -> None
Handler = Callable[[Response], Any]


class Listener:
    """Predicate + handler pair.

    Args:
        robot: Robot the listener belongs to.
        matcher: Called with each message; truthy means "handle it".
        callback: Called with a Response when the matcher accepts.
        description: Label used in log lines.
    """

    def __init__(
        self,
        robot: "Robot",
        matcher: Matcher,
        callback: Handler,
        description: str = "",
    ):
        self.robot = robot
        self.matcher = matcher
        self.callback = callback
        self.description = description or getattr(callback, "__name__", "")

    def match(self, message: Message) -> Any:
        return self.matcher(message)

    async def call(self, message: Message) -> bool:
        """Run the handler if the matcher accepts ``message``.

        Returns:
            True if the handler ran, False if the matcher rejected.
        """
        match = self.match(message)
        if not match:
            return False
        if match is True:
            match = None
        response = self.robot.response_class(self.robot, message, match)
        result = self.callback(response)
        if inspect.isawaitable(result):
            await result
        return True

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.description!r})"


class TextListener(Listener):
    """Listener that matches TextMessage text against a compiled pattern.

    The ``re.Match`` produced for a message is passed to the Response as
    ``response.match``.
    """

    def __init__(
        self,
        robot: "Robot",
        pattern: Pattern[str],
        callback: Handler,
        description: str = "",
    ):
        self.pattern = pattern

        def matcher(message: Message):
            if message.kind is not MessageKind.TEXT:
                return None
            return pattern.search(message.text)

        super().__init__(robot, matcher, callback, description or pattern.pattern)
