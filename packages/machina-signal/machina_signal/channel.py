"""Signal - ordered, synchronous subscriber list."""
from __future__ import annotations

from typing import Any, Callable

Handler = Callable[..., Any]


class Signal:
    """Calls every subscribed handler, in subscription order, on dispatch.

    Dispatch walks a snapshot of the subscriber list: handlers added while a
    dispatch is running fire from the next dispatch on, and handlers removed
    mid-dispatch are skipped if they have not run yet.
    """

    def __init__(self) -> None:
        self._handlers: list[Handler] = []
        self._once: set[int] = set()
        self._halted: bool = False

    def add(self, handler: Handler) -> None:
        """Subscribe a handler. No-op if it is already subscribed."""
        if self.has(handler):
            return
        self._handlers.append(handler)

    def add_once(self, handler: Handler) -> None:
        """Subscribe a handler that is dropped after its first call."""
        if self.has(handler):
            return
        self._handlers.append(handler)
        self._once.add(id(handler))

    def remove(self, handler: Handler) -> None:
        for i, existing in enumerate(self._handlers):
            if existing == handler:
                del self._handlers[i]
                self._once.discard(id(existing))
                return

    def remove_all(self) -> None:
        self._handlers.clear()
        self._once.clear()

    def has(self, handler: Handler) -> bool:
        return any(existing == handler for existing in self._handlers)

    def count(self) -> int:
        """Return the number of subscribed handlers."""
        return len(self._handlers)

    def halt(self) -> None:
        """Stop the dispatch in progress. Remaining handlers are not called."""
        self._halted = True

    def dispatch(self, *args: Any) -> None:
        snapshot = list(self._handlers)
        outer_halted = self._halted
        self._halted = False
        try:
            for handler in snapshot:
                if not any(h is handler for h in self._handlers):
                    continue
                if id(handler) in self._once:
                    self.remove(handler)
                handler(*args)
                if self._halted:
                    break
        finally:
            self._halted = outer_halted
