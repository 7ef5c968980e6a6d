"""Load machine definitions from YAML or JSON files."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Mapping

import yaml

from machina import Machine, StateConfig
from machina_loader.callbacks import CallbackRegistry
from machina_loader.config import LoggingConfig, MachineConfig

logger = logging.getLogger("machina.loader")

_HANDLER_KEYS = ("on_enter", "on_exit", "on_change")


def _load_raw_config(config_path: Path) -> dict[str, Any]:
    if not config_path.exists():
        raise FileNotFoundError(f"Machine definition not found at {config_path}")

    suffix = config_path.suffix.lower()
    with config_path.open("r", encoding="utf-8") as stream:
        if suffix in {".yaml", ".yml"}:
            return yaml.safe_load(stream) or {}
        if suffix == ".json":
            return json.load(stream)
        raise ValueError(f"Unsupported definition format: {suffix}")


def load_config(config_path: Path | str) -> MachineConfig:
    """Read a definition file into a ``MachineConfig``."""

    config_path = Path(config_path)
    raw = _load_raw_config(config_path)
    if not isinstance(raw, Mapping):
        raise ValueError(f"{config_path}: top level must be a mapping")

    states = raw.get("states")
    if not isinstance(states, list) or not states:
        raise ValueError(f"{config_path}: 'states' must be a non-empty list")
    for entry in states:
        if not isinstance(entry, Mapping) or "name" not in entry:
            raise ValueError(f"{config_path}: every state needs a 'name', got {entry!r}")

    logging_raw = dict(raw.get("logging") or {})
    log_path = logging_raw.get("filepath")
    if log_path:
        # Relative to the definition file.
        logging_raw["filepath"] = (config_path.parent / str(log_path)).resolve()
    elif "filepath" in logging_raw:
        logging_raw["filepath"] = None

    try:
        logging_config = LoggingConfig(**logging_raw)
    except TypeError as exc:
        raise ValueError(f"{config_path}: invalid logging settings: {exc}") from exc

    logger.debug("Loaded %d state(s) from %s", len(states), config_path)
    return MachineConfig(
        states=tuple(dict(entry) for entry in states),
        logging=logging_config,
    )


def _resolve_handlers(
    raw: Mapping[str, Any], callbacks: CallbackRegistry | None
) -> dict[str, Any]:
    resolved = dict(raw)
    for key in _HANDLER_KEYS:
        name = resolved.get(key)
        if name is None:
            continue
        if callbacks is None:
            raise KeyError(f"State {raw['name']!r} names callback {name!r} but no registry was given")
        resolved[key] = callbacks.get(str(name))
    return resolved


def build_machine(config: MachineConfig, callbacks: CallbackRegistry | None = None) -> Machine:
    """Register every state of ``config`` on a new, unstarted ``Machine``."""

    machine = Machine()
    machine.register_states(
        StateConfig.from_dict(_resolve_handlers(raw, callbacks)) for raw in config.states
    )
    return machine


def load_machine(config_path: Path | str, callbacks: CallbackRegistry | None = None) -> Machine:
    return build_machine(load_config(config_path), callbacks)
