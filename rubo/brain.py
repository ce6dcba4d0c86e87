"""In-memory key/value store shared by plugins.

Nothing is written to disk. A persistence layer can subscribe to the
``save`` and ``close`` events on ``brain.events`` and store ``brain.data``.
"""

from typing import TYPE_CHECKING, Any, Dict, List, Optional

import structlog

from .event_emitter import EventEmitter
from .message import User

if TYPE_CHECKING:
    from .robot import Robot

logger = structlog.get_logger("rubo.brain")


class Brain:
    """Key/value data and a user directory for one robot.

    Args:
        robot: Owning robot.
    """

    def __init__(self, robot: Optional["Robot"] = None):
        self.robot = robot
        self.events = EventEmitter()
        self.data: Dict[str, Any] = {"_private": {}}
        self._users: Dict[str, User] = {}
        self.closed = False

    def get(self, key: str, default: Any = None) -> Any:
        return self.data["_private"].get(key, default)

    def set(self, key: str, value: Any) -> "Brain":
        self.data["_private"][key] = value
        return self

    def remove(self, key: str) -> "Brain":
        self.data["_private"].pop(key, None)
        return self

    async def merge_data(self, data: Dict[str, Any]) -> None:
        """Merge previously saved data and announce it with ``loaded``."""
        self.data.update(data or {})
        await self.events.emit("loaded", self.data)

    async def save(self) -> None:
        await self.events.emit("save", self.data)

    async def close(self) -> None:
        """Emit ``save`` then ``close``. Safe to call more than once."""
        if self.closed:
            return
        self.closed = True
        await self.save()
        await self.events.emit("close")
        logger.debug("brain_closed", keys=len(self.data["_private"]))

    def users(self) -> List[User]:
        return list(self._users.values())

    def user_for_id(self, user_id: str, **options: Any) -> User:
        """Return the user with ``user_id``, creating it if unknown.

        When ``room`` is given and differs from the stored one, the
        stored user is replaced with a fresh record for that room.
        """
        user = self._users.get(user_id)
        room = options.get("room")
        if user is None or (room and user.room != room):
            user = User(id=user_id, **options)
            self._users[user_id] = user
        return user

    def user_for_name(self, name: str) -> Optional[User]:
        lowered = name.lower()
        for user in self._users.values():
            if (user.name or "").lower() == lowered:
                return user
        return None
