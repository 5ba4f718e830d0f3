"""StateMachine - current state, transition checks and handler dispatch."""
from __future__ import annotations

import logging
from typing import Generic, Iterable, Mapping

from simple_statemachine.constraints import TransitionConstraints
from simple_statemachine.handlers import StateHandlers
from simple_statemachine.types import (
    IllegalTransitionError,
    ListenerHandle,
    S,
    StateHandler,
    TransitionListener,
    format_state,
)

logger = logging.getLogger("simple_statemachine.machine")

_BEFORE = "before"
_AFTER = "after"


class StateMachine(Generic[S]):
    """Tracks the state of a module and runs callbacks on state changes.

    The machine starts unset (``current_state is None``). Assigning a state
    starts it, assigning None stops it. Every other assignment is a transition
    between two concrete states and, in strict mode, must be declared with
    ``set_transition_constraint``. Starting and stopping are always allowed.

    A transition from ``old`` to ``new`` runs, in this order:

    1. before-listeners, as ``listener(old, new)``
    2. the leave handler of ``old``, as ``handler(new)``
    3. the state write; ``current_state`` reads ``new`` from here on
    4. the enter handler of ``new``, as ``handler(old)``
    5. after-listeners, as ``listener(old, new)``

    Assigning the current state again is a NO-OP. Callbacks that assign a new
    state run a nested transition to completion before the outer one resumes.
    If a nested transition started from step 1 or 2 moves the machine away
    from ``old``, the outer transition is dropped: the nested one was validated
    against the real current state and wins. Exceptions from callbacks are not
    caught: if one escapes before step 3 the state is unchanged, after step 3
    it has already changed.
    """

    def __init__(
        self,
        strict: bool,
        transitions: Mapping[S, Iterable[S]] | None = None,
        name: str = "",
    ) -> None:
        self._strict = bool(strict)
        self._name = name
        self._current: S | None = None
        self._constraints: TransitionConstraints[S] = TransitionConstraints()
        self._handlers: StateHandlers[S] = StateHandlers()
        self._before: list[ListenerHandle] = []
        self._after: list[ListenerHandle] = []
        if transitions is not None:
            for source, targets in transitions.items():
                self.set_transition_constraint(source, targets)

    def __repr__(self) -> str:
        return (
            f"StateMachine(name={self._name!r}, strict={self._strict}, "
            f"current={format_state(self._current)})"
        )

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_strict(self) -> bool:
        """True if every transition between concrete states must be declared."""
        return self._strict

    @property
    def is_started(self) -> bool:
        return self._current is not None

    @property
    def current_state(self) -> S | None:
        """Current state, or None if the machine is stopped.

        Setting a different state performs a transition and may raise
        ``IllegalTransitionError`` in strict mode.
        """
        return self._current

    @current_state.setter
    def current_state(self, target: S | None) -> None:
        self._transition(target, force=False)

    def set_state(self, target: S | None) -> None:
        """Same as assigning ``current_state``."""
        self._transition(target, force=False)

    def force_state(self, target: S | None) -> None:
        """Change the state bypassing the transition constraints.

        Handlers and listeners still run. Meant for recovering a module that
        ended up in an unexpected state, not for the normal flow.
        """
        self._transition(target, force=True)

    # -- configuration ---------------------------------------------------

    def set_transition_constraint(self, source: S, targets: Iterable[S]) -> None:
        """Declare the states reachable from *source*. Replaces earlier calls.

        Only consulted in strict mode.
        """
        self._constraints.set(source, targets)

    def reset_transition_constraint(self, source: S) -> None:
        self._constraints.reset(source)

    def add_state_handlers(
        self,
        state: S,
        enter_handler: StateHandler | None = None,
        leave_handler: StateHandler | None = None,
    ) -> None:
        """Register callbacks for entering and leaving *state*.

        ``enter_handler(old_state)`` is called after the state has changed,
        ``leave_handler(new_state)`` before. A later call replaces the handler
        of a slot it fills and keeps the handler of a slot it omits.
        """
        self._handlers.add(state, enter_handler, leave_handler)

    def remove_state_handlers(
        self,
        state: S,
        enter_handler: StateHandler | None = None,
        leave_handler: StateHandler | None = None,
    ) -> None:
        """Unregister handlers. Safe to call for handlers that aren't registered."""
        self._handlers.remove(state, enter_handler, leave_handler)

    def on_before_transition(self, listener: TransitionListener) -> ListenerHandle:
        """Subscribe to transitions, notified before the state changes."""
        return self._subscribe(_BEFORE, listener, self._before)

    def on_after_transition(self, listener: TransitionListener) -> ListenerHandle:
        """Subscribe to transitions, notified after the state has changed."""
        return self._subscribe(_AFTER, listener, self._after)

    def unsubscribe(self, handle: ListenerHandle) -> bool:
        """Remove the subscription identified by *handle*.

        Returns False if it was already removed.
        """
        listeners = self._before if handle.phase == _BEFORE else self._after
        for i, registered in enumerate(listeners):
            if registered is handle:
                del listeners[i]
                return True
        return False

    # -- queries -----------------------------------------------------------

    def check_can_switch_to(self, target: S | None) -> bool:
        """Tell if assigning *target* would be accepted. Has no side effects."""
        if not self._strict or target is None or self._current is None:
            return True
        return self._constraints.allows(self._current, target)

    # -- internals ---------------------------------------------------------

    def _subscribe(
        self,
        phase: str,
        listener: TransitionListener,
        listeners: list[ListenerHandle],
    ) -> ListenerHandle:
        if not callable(listener):
            raise TypeError(
                f"Transition listener must be callable, got {type(listener).__name__}"
            )
        handle = ListenerHandle(phase=phase, listener=listener)
        listeners.append(handle)
        return handle

    def _label(self) -> str:
        return self._name or f"StateMachine@{id(self):x}"

    def _transition(self, target: S | None, force: bool) -> None:
        old = self._current
        if target == old:
            return
        if not self.check_can_switch_to(target):
            if not force:
                logger.debug(
                    "%s: rejected %s => %s",
                    self._label(), format_state(old), format_state(target),
                )
                raise IllegalTransitionError(old, target, self._name)
            logger.warning(
                "%s: forcing undeclared transition %s => %s",
                self._label(), format_state(old), format_state(target),
            )

        # Listeners (un)subscribed mid-dispatch only take part in the next transition.
        for handle in list(self._before):
            handle.listener(old, target)
        if self._superseded(old, target):
            return

        if old is not None:
            leave = self._handlers.leave_handler(old)
            if leave is not None:
                leave(target)
        if self._superseded(old, target):
            return

        self._current = target
        logger.debug(
            "%s: %s => %s", self._label(), format_state(old), format_state(target)
        )

        if target is not None:
            enter = self._handlers.enter_handler(target)
            if enter is not None:
                enter(old)

        for handle in list(self._after):
            handle.listener(old, target)

    def _superseded(self, old: S | None, target: S | None) -> bool:
        """True if a nested transition moved the machine away from *old*."""
        if self._current == old:
            return False
        logger.debug(
            "%s: %s => %s dropped, nested transition moved to %s",
            self._label(), format_state(old), format_state(target),
            format_state(self._current),
        )
        return True
