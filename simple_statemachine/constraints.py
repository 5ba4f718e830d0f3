"""TransitionConstraints registry."""
from __future__ import annotations

from typing import Generic, Iterable

from simple_statemachine.types import S


class TransitionConstraints(Generic[S]):
    """Maps a source state to the set of states it may move into.

    A source without an entry allows nothing. Whether that matters is up to
    the machine: free machines never consult the table.
    """

    def __init__(self) -> None:
        self._targets: dict[S, frozenset[S]] = {}

    def set(self, source: S, targets: Iterable[S]) -> None:
        """Register allowed targets for *source*. Replaces any previous set."""
        if source is None:
            raise ValueError("The unset state cannot be used as a constraint source")
        self._targets[source] = frozenset(targets)

    def reset(self, source: S) -> None:
        """Drop the constraint for *source*. No-op if there is none."""
        self._targets.pop(source, None)

    def allows(self, source: S, target: S) -> bool:
        allowed = self._targets.get(source)
        return allowed is not None and target in allowed

    def targets(self, source: S) -> frozenset[S] | None:
        """Allowed targets for *source*, or None if it was never constrained."""
        return self._targets.get(source)

    def has(self, source: S) -> bool:
        return source in self._targets

    def sources(self) -> list[S]:
        """List all constrained source states, in registration order."""
        return list(self._targets)
