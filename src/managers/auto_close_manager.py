# File: src/managers/auto_close_manager.py
"""
AutoCloseManager - closes ordinary doors that have been left open.

Each tracked door carries its own open counter. Every tick an OPEN door
counts up; reaching its limit issues a close and starts over. Any other
status resets the count. Airlock doors are never tracked.
"""
from utilities.blocks import DoorStatus
from utilities.logger import AirlockLogger


class AutoCloseEntry:
    """A non-airlock door, its open-time limit in ticks and its running count."""
    def __init__(self, door, limit_ticks):
        self.door = door
        self.limit_ticks = limit_ticks
        self.counter = 0

    def __repr__(self):
        return f"AutoCloseEntry({self.door!r}, limit={self.limit_ticks}, counter={self.counter})"


class AutoCloseManager:
    """Per-door countdowns, run every tick regardless of cycle state."""
    def __init__(self, settings):
        AirlockLogger.info("ACLO", f"[INIT] AutoCloseManager - enabled: {settings.AUTO_CLOSE_ENABLED}")
        self.settings = settings
        self.entries = []

    def refresh(self, doors):
        """Replace all entries from ``(door, limit_ticks)`` pairs.

        Counters are not carried over; a door mid-countdown starts again.
        """
        self.entries = [AutoCloseEntry(door, limit) for door, limit in doors]
        AirlockLogger.debug("ACLO", f"Tracking {len(self.entries)} doors")

    def tick(self):
        if not self.settings.AUTO_CLOSE_ENABLED:
            return
        for entry in self.entries:
            door = entry.door
            if door is None or not door.same_construct:
                entry.counter = 0
                continue

            if door.status == DoorStatus.OPEN:
                entry.counter += 1
                if entry.counter >= entry.limit_ticks:
                    AirlockLogger.info("ACLO", f"Closing '{door.custom_name}' after {entry.counter} ticks open")
                    door.close()
                    entry.counter = 0
            else:
                entry.counter = 0
