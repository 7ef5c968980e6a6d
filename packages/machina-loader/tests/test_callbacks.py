"""Tests for CallbackRegistry."""
from __future__ import annotations

import pytest

from machina_loader import CallbackRegistry


def _noop(state, data, action):  # type: ignore[no-untyped-def]
    pass


def test_register_and_get():
    registry = CallbackRegistry()
    registry.register("noop", _noop)
    assert registry.get("noop") is _noop
    assert registry.has("noop")


def test_get_unknown_raises():
    registry = CallbackRegistry()
    with pytest.raises(KeyError):
        registry.get("missing")


def test_register_overwrites():
    registry = CallbackRegistry()
    other = lambda state, data, action: None  # noqa: E731
    registry.register("cb", _noop)
    registry.register("cb", other)
    assert registry.get("cb") is other


def test_names_in_registration_order():
    registry = CallbackRegistry()
    registry.register("b", _noop)
    registry.register("a", _noop)
    assert registry.names() == ["b", "a"]
