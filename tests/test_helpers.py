"""Shared helpers for airlock controller unit tests.

Mock blocks implement the capability classes with plain attributes so a
test can set sensor values directly. ``ScriptedWorld`` moves oxygen in a
fixed, predictable way from the actuator state each tick.
"""

from utilities.blocks import (
    AirVent,
    ButtonPanel,
    Door,
    DoorStatus,
    GasGenerator,
    GasTank,
    LightingBlock,
    SensorBlock,
)
from utilities.logger import LogLevel
from utilities.settings import AirlockSettings


class MockDoor(Door):
    """Door that reaches its target instantly unless ``stuck``."""
    status = DoorStatus.CLOSED

    def __init__(self, name, status=DoorStatus.CLOSED, stuck=False, **kwargs):
        super().__init__(name, **kwargs)
        self.status = status
        self.stuck = stuck
        self.changes = 0

    def open(self):
        if self.stuck or self.status == DoorStatus.OPEN:
            return
        self.status = DoorStatus.OPEN
        self.changes += 1

    def close(self):
        if self.stuck or self.status == DoorStatus.CLOSED:
            return
        self.status = DoorStatus.CLOSED
        self.changes += 1


class MockVent(AirVent):
    can_pressurize = True

    def __init__(self, name, o2=0.95, can_pressurize=True, **kwargs):
        super().__init__(name, **kwargs)
        self.o2 = o2
        self.can_pressurize = can_pressurize

    def oxygen_level(self):
        return self.o2


class MockTank(GasTank):
    filled_ratio = 0.0

    def __init__(self, name, fill=0.0, **kwargs):
        super().__init__(name, **kwargs)
        self.filled_ratio = fill


class MockGenerator(GasGenerator):
    pass


class MockLight(LightingBlock):
    pass


class MockButton(ButtonPanel):
    pass


class MockSensor(SensorBlock):
    pass


def make_airlock(airlock_id="A1", o2=0.95, tank_fill=0.0):
    """Blocks for one complete airlock, returned as a name -> block dict."""
    return {
        "inner": MockDoor(f"Inner Door [{airlock_id}:INNER]"),
        "outer": MockDoor(f"Outer Door [{airlock_id}:OUTER]"),
        "vent": MockVent(f"Vent [{airlock_id}:VENT]", o2=o2),
        "light": MockLight(f"Light [{airlock_id}:LIGHT]", color=(255, 220, 180)),
        "tank": MockTank(f"Capture [{airlock_id}:PROCESSTANK]", fill=tank_fill),
        "button": MockButton(f"Button [{airlock_id}:OUTERBUTTON]"),
        "sensor": MockSensor(f"Sensor [{airlock_id}:INNERSENSOR]"),
    }


def make_grid():
    """Airlock A1 plus one base tank, one generator and two ordinary doors."""
    lock = make_airlock("A1")
    extras = {
        "base": MockTank("Main O2 [BASETANK]", fill=0.8),
        "gen": MockGenerator("Generator [O2H2]"),
        "galley": MockDoor("Galley Door [AUTOCLOSE:5]"),
        "hangar": MockDoor("Hangar Door [KEEPOPEN]"),
    }
    blocks = dict(lock)
    blocks.update(extras)
    return blocks


def settings(**overrides):
    return AirlockSettings(overrides)


def warnings_in(records, tag=None):
    """Messages from ``captured_logs`` records logged at WARNING."""
    return [msg for level, t, msg in records
            if level == LogLevel.WARNING and (tag is None or t == tag)]


class ScriptedWorld:
    """Deterministic chamber model for one airlock.

    - outer door open: vacuum
    - sealed, vents depressurizing into an enabled stockpiling tank:
      O2 falls by ``drop`` per tick to ``floor``; the tank gains ``drop / 2``
    - sealed, vents pressurizing with the tank supplying: O2 rises by
      ``rise`` per tick to ``ceiling``
    """
    def __init__(self, blocks, drop=0.025, floor=0.01, rise=0.05, ceiling=0.92):
        self.blocks = blocks
        self.drop = drop
        self.floor = floor
        self.rise = rise
        self.ceiling = ceiling

    def step(self):
        vent = self.blocks["vent"]
        tank = self.blocks["tank"]
        outer = self.blocks["outer"]

        if outer.status != DoorStatus.CLOSED:
            vent.o2 = 0.0
            return

        if vent.depressurize and tank.enabled and tank.stockpile:
            if vent.o2 > self.floor:
                vent.o2 = max(self.floor, vent.o2 - self.drop)
                tank.filled_ratio += self.drop / 2
        elif not vent.depressurize and tank.enabled and not tank.stockpile:
            vent.o2 = min(self.ceiling, vent.o2 + self.rise)
