# File: src/sim/blocks.py
"""Simulated blocks - in-memory stand-ins for grid hardware.

Each class fills in one capability from :mod:`utilities.blocks` with plain
state. Physics (door travel, gas flow) is advanced by :class:`sim.grid.SimGrid`.
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


class SimDoor(Door):
    """Door that takes ``travel_ticks`` steps to open or close.

    Commands are latched at any time but the door only moves while enabled.
    Re-issuing the command it is already carrying out does nothing.
    """
    def __init__(self, custom_name="", travel_ticks=2, **kwargs):
        super().__init__(custom_name, **kwargs)
        self.travel_ticks = travel_ticks
        self._status = DoorStatus.CLOSED
        self._remaining = 0

    @property
    def status(self):
        return self._status

    def open(self):
        if self._status in (DoorStatus.OPEN, DoorStatus.OPENING):
            return
        self._start(DoorStatus.OPENING, DoorStatus.OPEN)

    def close(self):
        if self._status in (DoorStatus.CLOSED, DoorStatus.CLOSING):
            return
        self._start(DoorStatus.CLOSING, DoorStatus.CLOSED)

    def _start(self, moving, final):
        if self.travel_ticks <= 0 and self.enabled:
            self._status = final
            return
        self._status = moving
        self._remaining = self.travel_ticks

    def step(self):
        if not self.enabled:
            return
        if self._status not in (DoorStatus.OPENING, DoorStatus.CLOSING):
            return
        self._remaining -= 1
        if self._remaining <= 0:
            self._status = DoorStatus.OPEN if self._status == DoorStatus.OPENING else DoorStatus.CLOSED


class SimAirVent(AirVent):
    """Vent reading its chamber's oxygen. A vent with no chamber reads 0."""
    def __init__(self, custom_name="", chamber=None, **kwargs):
        super().__init__(custom_name, **kwargs)
        self.chamber = chamber

    def oxygen_level(self):
        if self.chamber is None:
            return 0.0
        return self.chamber.oxygen

    @property
    def can_pressurize(self):
        return self.chamber is not None and self.chamber.sealed


class SimGasTank(GasTank):
    """Tank holding ``stored`` units of gas out of ``capacity``.

    One unit is one full chamber at 100% oxygen.
    """
    def __init__(self, custom_name="", capacity=2.0, stored=0.0, **kwargs):
        super().__init__(custom_name, **kwargs)
        self.capacity = capacity
        self.stored = stored

    @property
    def filled_ratio(self):
        if self.capacity <= 0:
            return 0.0
        return self.stored / self.capacity

    @property
    def room(self):
        return max(0.0, self.capacity - self.stored)

    def put(self, amount):
        """Store up to ``amount``; returns what was taken."""
        taken = min(amount, self.room)
        self.stored += taken
        return taken

    def take(self, amount):
        """Release up to ``amount``; returns what was given."""
        given = min(amount, self.stored)
        self.stored -= given
        return given


class SimGasGenerator(GasGenerator):
    """Generator with an unlimited supply while enabled."""

    def take(self, amount):
        return amount if self.enabled else 0.0


class SimLight(LightingBlock):
    pass


class SimButtonPanel(ButtonPanel):
    pass


class SimSensor(SensorBlock):
    pass
