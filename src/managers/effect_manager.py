# File: src/managers/effect_manager.py
"""Snapshots, alert effects and restores for airlock lighting fixtures."""

from utilities.logger import AirlockLogger
from utilities.palette import Palette


class LightState:
    """Captured visual state of one fixture."""
    def __init__(self, color, blink_interval, blink_length, blink_offset, enabled):
        self.color = color
        self.blink_interval = blink_interval
        self.blink_length = blink_length
        self.blink_offset = blink_offset
        self.enabled = enabled

    @classmethod
    def capture(cls, light):
        return cls(
            light.color,
            light.blink_interval,
            light.blink_length,
            light.blink_offset,
            light.enabled,
        )


class EffectManager:
    """Class to drive airlock lights around a cycle.

    Backups are keyed by each fixture's ``entity_id`` so two fixtures that
    share a name never overwrite each other.
    """
    ALERT_COLOR = Palette.RED
    ALERT_BLINK_INTERVAL = 1.0
    ALERT_BLINK_LENGTH = 60.0
    ALERT_BLINK_OFFSET = 0.0

    DEFAULT_COLOR = Palette.WHITE

    def snapshot(self, lights):
        """Capture every fixture's state into a fresh backup mapping."""
        backup = {}
        for light in lights:
            backup[light.entity_id] = LightState.capture(light)
        AirlockLogger.debug("FX", f"Saved state of {len(backup)} lights")
        return backup

    def apply_alert(self, lights):
        """Blink red and power on."""
        for light in lights:
            light.enabled = True
            light.color = self.ALERT_COLOR
            light.blink_interval = self.ALERT_BLINK_INTERVAL
            light.blink_length = self.ALERT_BLINK_LENGTH
            light.blink_offset = self.ALERT_BLINK_OFFSET

    def apply_normal(self, light):
        """Steady white, no blink."""
        light.blink_length = 0.0
        light.blink_interval = 0.0
        light.blink_offset = 0.0
        light.color = self.DEFAULT_COLOR

    def restore(self, lights, backup):
        """Replay captured states; fixtures missing from ``backup`` go steady white."""
        restored = 0
        for light in lights:
            state = backup.get(light.entity_id)
            if state is None:
                self.apply_normal(light)
                continue
            light.color = state.color
            light.blink_interval = state.blink_interval
            light.blink_length = state.blink_length
            light.blink_offset = state.blink_offset
            light.enabled = state.enabled
            restored += 1
        AirlockLogger.debug("FX", f"Restored {restored}/{len(lights)} lights")
