"""Shared type aliases, handles and errors for the state machine."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Hashable, Literal, TypeVar

S = TypeVar("S", bound=Hashable)

StateHandler = Callable[[Any], None]
"""Enter/leave callback. Receives the other endpoint of the transition (or None)."""

TransitionListener = Callable[[Any, Any], None]
"""Before/after callback. Receives ``(from_state, to_state)``, either may be None."""


@dataclass(frozen=True, slots=True, eq=False)
class ListenerHandle:
    """Opaque token returned by a listener subscription.

    Compared by identity, so subscribing the same callable twice yields two
    independent registrations.
    """

    phase: Literal["before", "after"]
    listener: TransitionListener

    def __post_init__(self) -> None:
        if self.phase not in ("before", "after"):
            raise ValueError(f"phase must be 'before' or 'after', got {self.phase!r}")


class IllegalTransitionError(Exception):
    """Raised when a strict machine is asked for a transition it doesn't allow."""

    def __init__(self, from_state: Any, to_state: Any, machine_name: str = "") -> None:
        self.from_state = from_state
        self.to_state = to_state
        self.machine_name = machine_name
        message = (
            f"Transition {format_state(from_state)} => {format_state(to_state)} "
            f"is not allowed"
        )
        if machine_name:
            message = f"{machine_name}: {message}"
        super().__init__(message)


def format_state(state: Any) -> str:
    """Render a state for logs and messages. The sentinel renders as ``NULL``.

    >>> format_state(None)
    'NULL'
    """
    if state is None:
        return "NULL"
    name = getattr(state, "name", None)
    if isinstance(name, str):
        return name
    return str(state)
