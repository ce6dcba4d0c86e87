"""Handler-facing wrapper around a dispatched message."""

import random as _random
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Optional, Sequence

from .message import Message, User

if TYPE_CHECKING:
    from .robot import Robot


@dataclass
class Envelope:
    """Addressing information handed to the adapter for outgoing text.

    Attributes:
        room: Room to post into (None for direct messages).
        user: User being answered, if any.
        message: The inbound message being answered, if any.
    """
    room: Optional[str] = None
    user: Optional[User] = None
    message: Optional[Message] = None


class Response:
    """Passed to every listener handler.

    Built fresh for each listener call and only valid during that call.

    Args:
        robot: Robot that dispatched the message.
        message: The message being handled.
        match: ``re.Match`` from a pattern listener, or None.
    """

    def __init__(self, robot: "Robot", message: Message, match: Any = None):
        self.robot = robot
        self.message = message
        self.match = match

    @property
    def envelope(self) -> Envelope:
        user = self.message.user
        return Envelope(room=user.room, user=user, message=self.message)

    async def send(self, *strings: str) -> None:
        """Post ``strings`` back to the room the message came from."""
        await self.robot.adapter.send(self.envelope, *strings)

    async def reply(self, *strings: str) -> None:
        """Post ``strings`` addressed to the sender."""
        await self.robot.adapter.reply(self.envelope, *strings)

    async def emote(self, *strings: str) -> None:
        await self.robot.adapter.emote(self.envelope, *strings)

    async def topic(self, *strings: str) -> None:
        await self.robot.adapter.topic(self.envelope, *strings)

    def random(self, items: Sequence[Any]) -> Any:
        return _random.choice(items)

    def finish(self) -> None:
        """Stop the remaining listeners from seeing this message."""
        self.message.finish()
