#!/usr/bin/env python3
"""Unit tests for light effect bookkeeping."""

from managers.effect_manager import EffectManager
from utilities.palette import Palette

from test_helpers import MockLight


def _light(name, **kwargs):
    return MockLight(name, **kwargs)


def test_alert_state():
    fx = EffectManager()
    light = _light("L", enabled=False)
    fx.apply_alert([light])
    assert light.enabled
    assert light.color == Palette.RED
    assert light.blink_interval == 1.0
    assert light.blink_length == 60.0
    assert light.blink_offset == 0.0
    print("✓ Alert state test passed")


def test_snapshot_and_restore_round_trip():
    fx = EffectManager()
    light = _light("L", color=(10, 20, 30), blink_interval=2.0, blink_length=25.0, blink_offset=5.0, enabled=False)
    backup = fx.snapshot([light])
    fx.apply_alert([light])
    fx.restore([light], backup)
    assert light.color == (10, 20, 30)
    assert (light.blink_interval, light.blink_length, light.blink_offset) == (2.0, 25.0, 5.0)
    assert light.enabled is False


def test_duplicate_names_do_not_collide():
    fx = EffectManager()
    a = _light("Airlock Light", color=(1, 1, 1))
    b = _light("Airlock Light", color=(2, 2, 2))
    backup = fx.snapshot([a, b])
    assert len(backup) == 2
    fx.apply_alert([a, b])
    fx.restore([a, b], backup)
    assert a.color == (1, 1, 1)
    assert b.color == (2, 2, 2)


def test_unknown_fixture_falls_back_to_steady_white():
    fx = EffectManager()
    known = _light("Known", color=(9, 9, 9))
    backup = fx.snapshot([known])
    late = _light("Added later", color=(0, 0, 255), blink_interval=1.0, blink_length=50.0)
    fx.restore([known, late], backup)
    assert known.color == (9, 9, 9)
    assert late.color == Palette.WHITE
    assert (late.blink_interval, late.blink_length, late.blink_offset) == (0.0, 0.0, 0.0)
