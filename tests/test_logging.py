"""Tests for log records and state formatting."""
import enum
import logging

import pytest
from simple_statemachine import IllegalTransitionError, StateMachine, format_state

LOGGER = "simple_statemachine.machine"


class Link(enum.Enum):
    Unlinked = 0
    Linked = 1
    Locked = 2


def test_format_state():
    assert format_state(None) == "NULL"
    assert format_state(Link.Linked) == "Linked"
    assert format_state("deploying") == "deploying"
    assert format_state(3) == "3"


def test_transition_logged_at_debug(caplog):
    caplog.set_level(logging.DEBUG, logger=LOGGER)
    sm = StateMachine(strict=False, name="link")

    sm.current_state = Link.Linked
    sm.current_state = None

    messages = [r.getMessage() for r in caplog.records if r.name == LOGGER]
    assert messages == ["link: NULL => Linked", "link: Linked => NULL"]


def test_self_transition_not_logged(caplog):
    caplog.set_level(logging.DEBUG, logger=LOGGER)
    sm = StateMachine(strict=False, name="link")
    sm.current_state = Link.Linked
    caplog.clear()

    sm.current_state = Link.Linked

    assert caplog.records == []


def test_rejection_logged_before_raising(caplog):
    caplog.set_level(logging.DEBUG, logger=LOGGER)
    sm = StateMachine(strict=True, name="link")
    sm.current_state = Link.Unlinked
    caplog.clear()

    with pytest.raises(IllegalTransitionError):
        sm.current_state = Link.Locked

    assert [r.getMessage() for r in caplog.records] == ["link: rejected Unlinked => Locked"]


def test_forced_transition_warns(caplog):
    caplog.set_level(logging.DEBUG, logger=LOGGER)
    sm = StateMachine(strict=True, transitions={Link.Unlinked: [Link.Linked]}, name="link")
    sm.current_state = Link.Unlinked
    caplog.clear()

    sm.force_state(Link.Locked)

    warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert len(warnings) == 1
    assert "forcing undeclared transition Unlinked => Locked" in warnings[0].getMessage()
    assert sm.current_state == Link.Locked


def test_declared_force_does_not_warn(caplog):
    caplog.set_level(logging.DEBUG, logger=LOGGER)
    sm = StateMachine(strict=True, transitions={Link.Unlinked: [Link.Linked]})
    sm.current_state = Link.Unlinked
    sm.force_state(Link.Linked)
    assert not [r for r in caplog.records if r.levelno >= logging.WARNING]


def test_unnamed_machine_label(caplog):
    caplog.set_level(logging.DEBUG, logger=LOGGER)
    sm = StateMachine(strict=False)
    sm.current_state = Link.Locked
    assert caplog.records[0].getMessage().startswith("StateMachine@")
