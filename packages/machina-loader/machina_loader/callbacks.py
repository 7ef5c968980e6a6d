"""CallbackRegistry - named state handlers for file-based definitions."""
from __future__ import annotations

from machina import StateHandler


class CallbackRegistry:
    """Maps handler name strings to callables of ``(state, data, action)``."""

    def __init__(self) -> None:
        self._callbacks: dict[str, StateHandler] = {}

    def register(self, name: str, fn: StateHandler) -> None:
        """Register a named handler. Overwrites if already registered."""
        self._callbacks[name] = fn

    def get(self, name: str) -> StateHandler:
        """Look up a handler. Raises KeyError if not registered."""
        if name not in self._callbacks:
            raise KeyError(f"Unknown callback: '{name}'")
        return self._callbacks[name]

    def has(self, name: str) -> bool:
        return name in self._callbacks

    def names(self) -> list[str]:
        """List all registered handler names."""
        return list(self._callbacks)
