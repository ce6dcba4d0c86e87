"""rubo - a chat robot that dispatches messages to ordered listeners."""

from .adapters import Adapter
from .brain import Brain
from .commands import CommandRegistry
from .event_emitter import EventEmitter
from .listener import Listener, TextListener
from .message import (
    CatchAllMessage,
    EnterMessage,
    LeaveMessage,
    Message,
    MessageKind,
    TextMessage,
    TopicMessage,
    User,
)
from .response import Envelope, Response
from .robot import Robot

__version__ = "0.1.0"

__all__ = [
    "Adapter",
    "Brain",
    "CatchAllMessage",
    "CommandRegistry",
    "EnterMessage",
    "Envelope",
    "EventEmitter",
    "LeaveMessage",
    "Listener",
    "Message",
    "MessageKind",
    "Response",
    "Robot",
    "TextListener",
    "TextMessage",
    "TopicMessage",
    "User",
]
