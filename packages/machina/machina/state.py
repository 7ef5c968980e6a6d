"""State - a named node with its own transition table and signals."""

from __future__ import annotations

from machina_signal import Signal


class State:
    def __init__(self, name: str) -> None:
        self._name = name
        self._transitions: dict[str, str | None] = {}
        self._on_enter = Signal()
        self._on_exit = Signal()
        self._on_change = Signal()

    def __repr__(self) -> str:
        return f"State({self._name!r})"

    @property
    def name(self) -> str:
        return self._name

    @property
    def transitions(self) -> dict[str, str | None]:
        """Copy of the transition table. Removed actions map to ``None``."""
        return dict(self._transitions)

    @property
    def on_enter(self) -> Signal:
        return self._on_enter

    @property
    def on_exit(self) -> Signal:
        return self._on_exit

    @property
    def on_change(self) -> Signal:
        return self._on_change

    def add_transition(self, action: str, target: str) -> None:
        """Map ``action`` to ``target``. Ignored if ``action`` already has a target."""
        if self.get_target(action) is not None:
            return
        self._transitions[action] = target

    def remove_transition(self, action: str) -> None:
        """Clear the target for ``action``. The key is kept with a ``None`` target."""
        self._transitions[action] = None

    def get_target(self, action: str | None) -> str | None:
        if action is None:
            return None
        return self._transitions.get(action)

    def actions(self) -> list[str]:
        """List actions that currently lead somewhere, in registration order."""
        return [a for a, target in self._transitions.items() if target is not None]
