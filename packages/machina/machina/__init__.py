"""machina - A synchronous finite state machine with cancellable transitions."""

from machina.config import StateConfig, TransitionConfig
from machina.machine import Machine, QueuedAction
from machina.state import State
from machina.types import ActiveStateError, NoStatesError, StateHandler

__all__ = [
    "Machine",
    "State",
    "StateConfig",
    "TransitionConfig",
    "QueuedAction",
    "StateHandler",
    "NoStatesError",
    "ActiveStateError",
]
