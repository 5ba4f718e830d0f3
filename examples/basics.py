"""Strict and free machines -- the two modes side by side.

Demonstrates:
- Declaring transitions for a strict machine
- Checking a transition before attempting it
- Starting and stopping a machine by assigning a state / None
- Enter/leave handlers and before/after listeners on a free machine

Run: python examples/basics.py
"""

import enum

from simple_statemachine import StateMachine, format_state


class State(enum.Enum):
    One = 1
    Two = 2
    Three = 3


def strict_machine() -> None:
    print("=== Strict machine ===\n")
    sm = StateMachine(strict=True)
    sm.set_transition_constraint(State.One, [State.Two])
    sm.add_state_handlers(
        State.One,
        enter_handler=lambda old: print(f"  Move from {format_state(old)} to One"),
        leave_handler=lambda new: print(f"  Move from One to {format_state(new)}"),
    )

    sm.current_state = State.One  # Start the machine.

    if sm.check_can_switch_to(State.Two):
        sm.current_state = State.Two  # Declared, so allowed.

    if sm.check_can_switch_to(State.Three):
        sm.current_state = State.Three  # Two has no way out; never happens.
    else:
        print("  Two => Three is not declared, staying in Two")

    sm.current_state = None  # Stopping is always allowed.
    print(f"  Stopped, current state: {format_state(sm.current_state)}\n")


def free_machine() -> None:
    print("=== Free machine ===\n")
    sm = StateMachine(strict=False)
    sm.add_state_handlers(
        State.One,
        enter_handler=lambda old: print("  Now in state One"),
        leave_handler=lambda new: print(f"  Going into state: {format_state(new)}"),
    )
    sm.on_before_transition(lambda old, new: print(
        f"  Before move: current={format_state(sm.current_state)}, new={format_state(new)}"))
    sm.on_after_transition(lambda old, new: print(
        f"  After move: old={format_state(old)}, current={format_state(sm.current_state)}"))

    for target in [State.One, State.Two, State.Three, None]:
        print(f"-> {format_state(target)}")
        sm.current_state = target


def main() -> None:
    strict_machine()
    free_machine()


if __name__ == "__main__":
    main()
