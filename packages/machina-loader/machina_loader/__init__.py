"""machina-loader - Build machina machines from YAML or JSON definitions."""
from __future__ import annotations

from machina_loader.callbacks import CallbackRegistry
from machina_loader.config import LoggingConfig, MachineConfig
from machina_loader.loader import build_machine, load_config, load_machine
from machina_loader.log import configure_logging

__all__ = [
    "CallbackRegistry",
    "LoggingConfig",
    "MachineConfig",
    "build_machine",
    "configure_logging",
    "load_config",
    "load_machine",
]
