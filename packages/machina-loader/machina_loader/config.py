"""Dataclass definitions for machine definition files."""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal, Mapping, Optional


@dataclass(frozen=True)
class LoggingConfig:
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    filepath: Optional[Path] = None
    max_bytes: int = 1024 * 1024
    backup_count: int = 3
    console: bool = True


@dataclass(frozen=True)
class MachineConfig:
    """A machine definition: raw state descriptors plus logging settings.

    Handler fields in ``states`` hold callback names, resolved when the
    machine is built.
    """

    states: tuple[Mapping[str, Any], ...]
    logging: LoggingConfig = field(default_factory=LoggingConfig)
