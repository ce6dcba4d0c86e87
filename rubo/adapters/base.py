"""Adapter contract between a chat transport and the robot."""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

import structlog

from ..event_emitter import EventEmitter
from ..message import Message
from ..response import Envelope

if TYPE_CHECKING:
    from ..robot import Robot


class Adapter(ABC):
    """Base class for chat transports.

    Subclasses turn transport events into Message objects and hand them
    to ``receive``, and deliver outgoing text in ``send``/``reply``.
    They must emit ``connected`` on ``events`` once the session is up.

    Args:
        robot: Robot that receives messages from this adapter.
    """

    name: str = ""

    def __init__(self, robot: "Robot"):
        self.robot = robot
        self.events = EventEmitter()
        self.logger = structlog.get_logger("rubo.adapters").bind(adapter=self.name)

    @abstractmethod
    async def send(self, envelope: Envelope, *strings: str) -> None:
        """Deliver ``strings`` to the room in ``envelope``."""

    async def reply(self, envelope: Envelope, *strings: str) -> None:
        """Deliver ``strings`` addressed to ``envelope.user``."""
        await self.send(envelope, *strings)

    async def emote(self, envelope: Envelope, *strings: str) -> None:
        await self.send(envelope, *strings)

    async def topic(self, envelope: Envelope, *strings: str) -> None:
        await self.send(envelope, *strings)

    @abstractmethod
    async def run(self) -> None:
        """Connect, emit ``connected``, then feed messages until closed."""

    async def close(self) -> None:
        """Disconnect from the transport."""

    async def receive(self, message: Message) -> None:
        await self.robot.receive(message)
