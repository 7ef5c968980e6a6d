"""machina-signal - Synchronous notification channels for machina."""
from __future__ import annotations

from machina_signal.channel import Handler, Signal

__all__ = ["Handler", "Signal"]
