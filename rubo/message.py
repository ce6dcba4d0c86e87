"""Inbound chat events and the users who send them.

Every event the adapter feeds into ``Robot.receive`` is one of the
message classes below. Each class carries a ``kind`` tag so listener
predicates can switch on ``message.kind`` instead of probing types.

Key classes:
    User: Chat participant, also used as the reply envelope target.
    Message: Base class holding the user and the ``done`` flag.
    TextMessage, EnterMessage, LeaveMessage, TopicMessage: Transport events.
    CatchAllMessage: Synthetic wrapper for a message no listener matched.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Optional, Pattern, Union

from pydantic import BaseModel, ConfigDict, Field


class MessageKind(str, Enum):
    """Tag identifying which variant a Message is."""
    TEXT = "text"
    ENTER = "enter"
    LEAVE = "leave"
    TOPIC = "topic"
    CATCH_ALL = "catch_all"


class User(BaseModel):
    """A chat participant.

    Adapters may attach transport-specific fields; they are kept as
    extra attributes on the model.
    """

    model_config = ConfigDict(extra="allow")

    id: str = Field(..., description="Transport-unique user id")
    name: Optional[str] = Field(default=None, description="Display name")
    room: Optional[str] = Field(default=None, description="Room the user spoke in")

    def model_post_init(self, __context: Any) -> None:
        if self.name is None:
            self.name = self.id

    def __str__(self) -> str:
        return self.name or self.id


@dataclass
class Message:
    """Base class for everything dispatched through the robot.

    Attributes:
        user: User the event originated from.
        done: Set by a handler to stop further listeners for this message.
    """

    kind: ClassVar[MessageKind]

    user: User
    done: bool = field(default=False, kw_only=True)

    @property
    def room(self) -> Optional[str]:
        return self.user.room

    def finish(self) -> None:
        """Prevent any remaining listeners from seeing this message."""
        self.done = True


@dataclass
class TextMessage(Message):
    """A plain chat line."""

    kind: ClassVar[MessageKind] = MessageKind.TEXT

    text: str = ""
    id: Optional[str] = None

    def match(self, pattern: Union[str, Pattern[str]]):
        """Search the text with ``pattern``; returns ``re.Match`` or None."""
        if isinstance(pattern, str):
            pattern = re.compile(pattern)
        return pattern.search(self.text)

    def __str__(self) -> str:
        return self.text


@dataclass
class EnterMessage(Message):
    """A user joined the room."""

    kind: ClassVar[MessageKind] = MessageKind.ENTER

    text: Optional[str] = None


@dataclass
class LeaveMessage(Message):
    """A user left the room."""

    kind: ClassVar[MessageKind] = MessageKind.LEAVE

    text: Optional[str] = None


@dataclass
class TopicMessage(Message):
    """The room topic changed; ``text`` holds the new topic."""

    kind: ClassVar[MessageKind] = MessageKind.TOPIC

    text: str = ""


@dataclass(init=False)
class CatchAllMessage(Message):
    """Wraps a message that no listener handled.

    The robot builds one of these at most once per original message and
    never wraps a CatchAllMessage again.
    """

    kind: ClassVar[MessageKind] = MessageKind.CATCH_ALL

    message: Message

    def __init__(self, message: Message):
        if isinstance(message, CatchAllMessage):
            raise TypeError("CatchAllMessage cannot wrap another CatchAllMessage")
        self.message = message
        self.user = message.user
        self.done = False
