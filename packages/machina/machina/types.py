"""Shared type aliases and errors for machina."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable

if TYPE_CHECKING:
    from machina.state import State

# Notification handler signature: (state, data, action).
StateHandler = Callable[["State", Any, "str | None"], None]


class NoStatesError(RuntimeError):
    """Raised when a machine is started before any state is registered."""

    def __init__(self, message: str = "State machine cannot start. No states defined.") -> None:
        super().__init__(message)


class ActiveStateError(RuntimeError):
    """Raised when removing a state the machine is in or moving into."""

    def __init__(self, state_name: str, message: str) -> None:
        self.state_name = state_name
        super().__init__(message)
