"""Chat transport adapters and the name -> adapter class table."""

from typing import TYPE_CHECKING, Dict, Type

from ..exceptions import AdapterNotFoundError
from .base import Adapter
from .shell import ShellAdapter

if TYPE_CHECKING:
    from ..robot import Robot

ADAPTERS: Dict[str, Type[Adapter]] = {
    ShellAdapter.name: ShellAdapter,
}


def register_adapter(name: str, adapter_cls: Type[Adapter]) -> None:
    """Make ``adapter_cls`` available to ``use`` under ``name``."""
    ADAPTERS[name.lower()] = adapter_cls


def use(name: str, robot: "Robot") -> Adapter:
    """Instantiate the adapter registered as ``name`` for ``robot``.

    Raises:
        AdapterNotFoundError: No adapter has that name.
    """
    adapter_cls = ADAPTERS.get(str(name).lower())
    if adapter_cls is None:
        raise AdapterNotFoundError(str(name), available=sorted(ADAPTERS))
    return adapter_cls(robot)


__all__ = ["ADAPTERS", "Adapter", "ShellAdapter", "register_adapter", "use"]
