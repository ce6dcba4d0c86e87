"""Line-oriented adapter for talking to the robot from a terminal."""

import asyncio
import sys
from typing import TYPE_CHECKING, Optional, TextIO

from ..message import TextMessage
from ..response import Envelope
from .base import Adapter

if TYPE_CHECKING:
    from ..robot import Robot

SHELL_USER_ID = "1"
SHELL_ROOM = "Shell"


class ShellAdapter(Adapter):
    """Reads one message per input line and prints outgoing strings.

    Args:
        robot: Robot to feed messages to.
        stdin: Input stream (defaults to ``sys.stdin``).
        stdout: Output stream (defaults to ``sys.stdout``).
    """

    name = "shell"

    def __init__(
        self,
        robot: "Robot",
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
    ):
        super().__init__(robot)
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout
        self.running = False
        self._next_id = 0

    async def send(self, envelope: Envelope, *strings: str) -> None:
        for text in strings:
            self.stdout.write(f"{text}\n")
        self.stdout.flush()

    async def reply(self, envelope: Envelope, *strings: str) -> None:
        name = envelope.user.name if envelope.user else ""
        await self.send(envelope, *(f"{name}: {text}" for text in strings))

    async def emote(self, envelope: Envelope, *strings: str) -> None:
        await self.send(envelope, *(f"* {text}" for text in strings))

    async def run(self) -> None:
        self.running = True
        await self.events.emit("connected")
        self.logger.info("shell_connected")

        loop = asyncio.get_running_loop()
        user = self.robot.brain.user_for_id(
            SHELL_USER_ID, name="Shell", room=SHELL_ROOM
        )
        while self.running:
            line = await loop.run_in_executor(None, self.stdin.readline)
            if not line:
                break
            text = line.strip()
            if not text:
                continue
            self._next_id += 1
            await self.receive(TextMessage(user, text, str(self._next_id)))

        self.running = False
        self.logger.info("shell_disconnected")

    async def close(self) -> None:
        self.running = False
