"""Tests for notification ordering and cancellation."""
from __future__ import annotations

from typing import Any

import pytest

from machina import Machine, State


def _two_states() -> Machine:
    machine = Machine()
    a = State("a")
    a.add_transition("go", "b")
    b = State("b")
    b.add_transition("back", "a")
    machine.add_state(a)
    machine.add_state(b)
    return machine


def _record(machine: Machine, log: list[tuple[str, ...]]) -> None:
    """Subscribe recorders to every state and machine signal."""

    def recorder(kind: str, scope: str):  # type: ignore[no-untyped-def]
        def handler(state: State, data: Any, action: str | None) -> None:
            log.append((scope, kind, state.name))
        return handler

    for state in machine.states.values():
        state.on_exit.add(recorder("exit", "state"))
        state.on_enter.add(recorder("enter", "state"))
        state.on_change.add(recorder("change", "state"))
    machine.on_exit.add(recorder("exit", "machine"))
    machine.on_enter.add(recorder("enter", "machine"))
    machine.on_change.add(recorder("change", "machine"))


@pytest.fixture
def machine() -> Machine:
    machine = _two_states()
    machine.start()
    return machine


class TestOrdering:
    def test_exit_enter_change_order(self, machine: Machine) -> None:
        log: list[tuple[str, ...]] = []
        _record(machine, log)

        machine.action("go")

        assert log == [
            ("state", "exit", "a"),
            ("machine", "exit", "a"),
            ("state", "enter", "b"),
            ("machine", "enter", "b"),
            ("state", "change", "b"),
            ("machine", "change", "b"),
        ]

    def test_state_is_not_committed_during_enter(self, machine: Machine) -> None:
        seen = []
        machine.get_state("b").on_enter.add(
            lambda state, data, action: seen.append(machine.current_state.name)
        )
        machine.get_state("b").on_change.add(
            lambda state, data, action: seen.append(machine.current_state.name)
        )
        machine.action("go")
        assert seen == ["a", "b"]

    def test_handlers_receive_action_and_data(self, machine: Machine) -> None:
        received = []
        machine.on_exit.add(lambda state, data, action: received.append(("exit", state.name, data, action)))
        machine.on_enter.add(lambda state, data, action: received.append(("enter", state.name, data, action)))
        machine.action("go", 7)
        assert received == [("exit", "a", 7, "go"), ("enter", "b", 7, "go")]

    def test_machine_signals_fire_for_every_state(self, machine: Machine) -> None:
        changes = []
        machine.on_change.add(lambda state, data, action: changes.append(state.name))
        machine.action("go")
        machine.action("back")
        machine.action("go")
        assert changes == ["b", "a", "b"]


class TestCancel:
    def test_cancel_on_state_exit(self, machine: Machine) -> None:
        log: list[tuple[str, ...]] = []
        machine.get_state("a").on_exit.add(lambda *args: machine.cancel())
        _record(machine, log)

        machine.action("go")

        # The machine-wide exit still fires; enter and change do not.
        assert log == [("state", "exit", "a"), ("machine", "exit", "a")]
        assert machine.current_state.name == "a"
        assert machine.previous_state is None
        assert machine.history == []

    def test_cancel_on_machine_exit(self, machine: Machine) -> None:
        machine.on_exit.add(lambda *args: machine.cancel())
        machine.action("go")
        assert machine.current_state.name == "a"

    def test_cancel_on_enter(self, machine: Machine) -> None:
        log: list[tuple[str, ...]] = []
        _record(machine, log)
        machine.get_state("b").on_enter.add(lambda *args: machine.cancel())

        machine.action("go")

        assert log == [
            ("state", "exit", "a"),
            ("machine", "exit", "a"),
            ("state", "enter", "b"),
            ("machine", "enter", "b"),
        ]
        assert machine.current_state.name == "a"
        assert machine.history == []

    def test_cancel_is_reset_for_next_transition(self, machine: Machine) -> None:
        cancel_next = [True]

        def guard(*args: Any) -> None:
            if cancel_next:
                cancel_next.pop()
                machine.cancel()

        machine.get_state("b").on_enter.add(guard)

        machine.action("go")
        assert machine.current_state.name == "a"

        machine.action("go")
        assert machine.current_state.name == "b"
        assert machine.history == ["a"]

    def test_cancel_on_change_has_no_effect(self, machine: Machine) -> None:
        machine.get_state("b").on_change.add(lambda *args: machine.cancel())
        machine.action("go")
        assert machine.current_state.name == "b"
        machine.action("back")
        assert machine.current_state.name == "a"

    def test_cancelled_start(self) -> None:
        machine = _two_states()
        machine.get_state("a").on_enter.add(lambda *args: machine.cancel())
        machine.start()
        assert machine.current_state is None
        assert not machine.started

    def test_history_counts_only_committed(self, machine: Machine) -> None:
        block = {"active": False}
        machine.on_enter.add(lambda *args: machine.cancel() if block["active"] else None)

        machine.action("go")
        block["active"] = True
        machine.action("back")
        block["active"] = False
        machine.action("back")
        machine.action("go")

        assert machine.history == ["a", "b", "a"]
        assert machine.current_state.name == "b"
        assert machine.previous_state.name == "a"
