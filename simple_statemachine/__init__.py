"""simple-statemachine - Finite state machine for modular, event-driven components."""
from __future__ import annotations

from simple_statemachine.constraints import TransitionConstraints
from simple_statemachine.handlers import StateHandlers
from simple_statemachine.machine import StateMachine
from simple_statemachine.types import (
    IllegalTransitionError,
    ListenerHandle,
    StateHandler,
    TransitionListener,
    format_state,
)

__all__ = [
    "StateMachine",
    "TransitionConstraints",
    "StateHandlers",
    "IllegalTransitionError",
    "ListenerHandle",
    "StateHandler",
    "TransitionListener",
    "format_state",
]
