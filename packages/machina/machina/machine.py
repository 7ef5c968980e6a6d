"""Machine - state registry, transition engine and pending-action queue."""

from __future__ import annotations

import logging
from collections import deque
from typing import Any, Iterable, NamedTuple

from machina.config import StateConfig
from machina.state import State
from machina.types import ActiveStateError, NoStatesError
from machina_signal import Signal

logger = logging.getLogger("machina.machine")


class QueuedAction(NamedTuple):
    action: str
    data: Any


class Machine:
    """Synchronous finite state machine.

    ``action()`` resolves the current state's target for an action and moves
    there, firing exit, enter and change signals (state-specific first, then
    machine-wide).  Handlers on exit or enter may call ``cancel()`` to abort
    the move before it is committed.  Actions submitted while a transition
    is running, or before ``start()``, are queued and replayed in FIFO order
    once the running transition finishes.
    """

    def __init__(self) -> None:
        self._states: dict[str, State] = {}
        self._initial: State | None = None
        self._current: State | None = None
        self._previous: State | None = None
        self._target: State | None = None
        self._history: list[str] = []
        self._queue: deque[QueuedAction] = deque()
        self._in_transition: bool = False
        self._cancelled: bool = False
        self._draining: bool = False
        self._on_enter = Signal()
        self._on_exit = Signal()
        self._on_change = Signal()

    # --- Properties ---

    @property
    def states(self) -> dict[str, State]:
        """Copy of the registry, in registration order."""
        return dict(self._states)

    @property
    def initial(self) -> State | None:
        return self._initial

    @property
    def current_state(self) -> State | None:
        return self._current

    @property
    def previous_state(self) -> State | None:
        return self._previous

    @property
    def history(self) -> list[str]:
        """Names of the states left by each committed transition, oldest first."""
        return list(self._history)

    @property
    def started(self) -> bool:
        """True once a transition into the initial state has committed."""
        return self._current is not None

    @property
    def in_transition(self) -> bool:
        return self._in_transition

    @property
    def on_enter(self) -> Signal:
        return self._on_enter

    @property
    def on_exit(self) -> Signal:
        return self._on_exit

    @property
    def on_change(self) -> Signal:
        return self._on_change

    def pending(self) -> int:
        """Return the number of queued actions."""
        return len(self._queue)

    def total(self) -> int:
        return len(self._states)

    # --- Registry ---

    def add_state(self, state: State, initial: bool = False) -> State | None:
        """Register a state. Returns ``None`` if the name is already taken.

        The first state registered becomes the initial state; a later one
        passed with ``initial=True`` replaces it.
        """
        if state.name in self._states:
            return None
        initial = initial or not self._states
        self._states[state.name] = state
        if initial:
            self._initial = state
        return state

    def register_state(self, config: StateConfig) -> State | None:
        """Build a state from a descriptor and register it."""
        state = State(config.name)
        for transition in config.transitions:
            state.add_transition(transition.action, transition.target)
        if config.on_enter is not None:
            state.on_enter.add(config.on_enter)
        if config.on_exit is not None:
            state.on_exit.add(config.on_exit)
        if config.on_change is not None:
            state.on_change.add(config.on_change)
        return self.add_state(state, initial=config.initial)

    def register_states(self, configs: Iterable[StateConfig]) -> None:
        for config in configs:
            self.register_state(config)

    def get_state(self, name: str) -> State | None:
        return self._states.get(name)

    def has_state(self, name: str) -> bool:
        return name in self._states

    def remove_state(self, name: str) -> State | None:
        """Unregister a state and return it, or ``None`` if unknown.

        Raises ``ActiveStateError`` for the current state, for the target
        of a transition in flight, and for the initial state once started.
        """
        state = self._states.get(name)
        if state is None:
            return None
        if state is self._current:
            raise ActiveStateError(name, f"Cannot remove current state {name!r}")
        if state is self._target:
            raise ActiveStateError(name, f"Cannot remove state {name!r} while entering it")
        if state is self._initial and self._current is not None:
            raise ActiveStateError(name, f"Cannot remove initial state {name!r} after start")
        del self._states[name]
        if state is self._initial:
            self._initial = next(iter(self._states.values()), None)
        return state

    # --- Transitions ---

    def start(self) -> None:
        """Move into the initial state. Raises ``NoStatesError`` if there is none."""
        if self._initial is None:
            raise NoStatesError()
        if self._in_transition:
            logger.debug("start() ignored: transition to %r in flight", self._target)
            return
        self._transition_to(self._initial, None, None)

    def action(self, action: str, data: Any = None) -> None:
        """Submit an action. Unknown actions are ignored."""
        if self._in_transition or self._current is None:
            self._queue.append(QueuedAction(action, data))
            logger.debug("Queued action %r (%d pending)", action, len(self._queue))
            return
        target = self._current.get_target(action)
        next_state = self._states.get(target) if target is not None else None
        if next_state is None:
            logger.debug("Action %r has no transition from %r", action, self._current.name)
            return
        self._transition_to(next_state, data, action)

    def cancel(self) -> None:
        """Abort the transition in flight. Only meaningful from exit/enter handlers."""
        if not self._in_transition:
            return
        self._cancelled = True

    def _transition_to(self, next_state: State, data: Any, action: str | None) -> None:
        self._in_transition = True
        self._cancelled = False
        self._target = next_state
        try:
            self._run(next_state, data, action)
        finally:
            self._in_transition = False
            self._cancelled = False
            self._target = None
        self._drain()

    def _run(self, next_state: State, data: Any, action: str | None) -> None:
        current = self._current
        if current is not None:
            current.on_exit.dispatch(current, data, action)
            self._on_exit.dispatch(current, data, action)
        if self._cancelled:
            logger.debug("Transition to %r cancelled on exit", next_state.name)
            return

        next_state.on_enter.dispatch(next_state, data, action)
        self._on_enter.dispatch(next_state, data, action)
        if self._cancelled:
            logger.debug("Transition to %r cancelled on enter", next_state.name)
            return

        if current is not None:
            self._previous = current
            self._history.append(current.name)
        self._current = next_state
        logger.debug(
            "Transition %r -> %r on %r",
            current.name if current is not None else None,
            next_state.name,
            action,
        )
        next_state.on_change.dispatch(next_state, data, action)
        self._on_change.dispatch(next_state, data, action)

    def _drain(self) -> None:
        # Nested transitions started from here return to this loop instead
        # of draining recursively.
        if self._draining or self._current is None:
            return
        self._draining = True
        try:
            while self._queue:
                queued = self._queue.popleft()
                if self._current.get_target(queued.action) is None:
                    logger.debug(
                        "Discarded queued action %r in state %r",
                        queued.action,
                        self._current.name,
                    )
                    continue
                self.action(queued.action, queued.data)
        finally:
            self._draining = False
