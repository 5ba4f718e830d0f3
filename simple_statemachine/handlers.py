"""StateHandlers registry."""
from __future__ import annotations

from typing import Generic

from simple_statemachine.types import S, StateHandler


def _check_callable(slot: str, handler: StateHandler | None) -> None:
    if handler is not None and not callable(handler):
        raise TypeError(f"{slot} handler must be callable, got {type(handler).__name__}")


class StateHandlers(Generic[S]):
    """Per-state enter/leave callbacks.

    Each state has at most one enter and one leave handler. Registering a
    handler for a slot that is already filled replaces it; passing None for a
    slot leaves the existing handler alone.
    """

    def __init__(self) -> None:
        self._entries: dict[S, list[StateHandler | None]] = {}

    def add(
        self,
        state: S,
        enter: StateHandler | None = None,
        leave: StateHandler | None = None,
    ) -> None:
        if state is None:
            raise ValueError("The unset state cannot have handlers")
        _check_callable("enter", enter)
        _check_callable("leave", leave)
        if enter is None and leave is None:
            return
        entry = self._entries.setdefault(state, [None, None])
        if enter is not None:
            entry[0] = enter
        if leave is not None:
            entry[1] = leave

    def remove(
        self,
        state: S,
        enter: StateHandler | None = None,
        leave: StateHandler | None = None,
    ) -> None:
        """Clear the slots that currently hold the given handlers.

        Safe to call for handlers that were never registered.
        """
        if state is None:
            raise ValueError("The unset state cannot have handlers")
        entry = self._entries.get(state)
        if entry is None:
            return
        if enter is not None and entry[0] is enter:
            entry[0] = None
        if leave is not None and entry[1] is leave:
            entry[1] = None
        if entry[0] is None and entry[1] is None:
            del self._entries[state]

    def enter_handler(self, state: S) -> StateHandler | None:
        entry = self._entries.get(state)
        return entry[0] if entry is not None else None

    def leave_handler(self, state: S) -> StateHandler | None:
        entry = self._entries.get(state)
        return entry[1] if entry is not None else None

    def has(self, state: S) -> bool:
        """Check if the state has at least one handler."""
        return state in self._entries

    def states(self) -> list[S]:
        return list(self._entries)
