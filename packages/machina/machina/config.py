"""State descriptors used to build states in bulk."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from machina.types import StateHandler


@dataclass(frozen=True)
class TransitionConfig:
    action: str
    target: str

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> TransitionConfig:
        try:
            return cls(action=str(raw["action"]), target=str(raw["target"]))
        except (KeyError, TypeError) as exc:
            raise ValueError(f"Transition requires 'action' and 'target', got {raw!r}") from exc


@dataclass(frozen=True)
class StateConfig:
    """Describes one state: its transitions, optional handlers and initial flag."""

    name: str
    transitions: tuple[TransitionConfig, ...] = ()
    on_enter: StateHandler | None = None
    on_exit: StateHandler | None = None
    on_change: StateHandler | None = None
    initial: bool = False

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("StateConfig name must be non-empty")

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> StateConfig:
        """Build from the ``{name, transitions, on_enter, ...}`` descriptor shape."""
        if "name" not in raw:
            raise ValueError(f"State descriptor requires a 'name', got {dict(raw)!r}")
        transitions = tuple(
            TransitionConfig.from_dict(t) for t in raw.get("transitions") or ()
        )
        return cls(
            name=str(raw["name"]),
            transitions=transitions,
            on_enter=raw.get("on_enter"),
            on_exit=raw.get("on_exit"),
            on_change=raw.get("on_change"),
            initial=bool(raw.get("initial", False)),
        )
