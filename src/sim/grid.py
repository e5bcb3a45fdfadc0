# File: src/sim/grid.py
"""
SimGrid - a tiny gas model for driving the controller without hardware.

A grid is a flat list of simulated blocks plus one :class:`SimChamber` per
airlock. Each :meth:`SimGrid.step` moves doors one tick along their travel
and then moves gas:

- any outer door not closed vents the chamber to vacuum;
- otherwise any inner door not closed equalises it with the habitat;
- otherwise (sealed) each enabled vent moves up to ``vent_rate`` per tick,
  into enabled stockpiling tanks when depressurizing, or out of enabled
  supply tanks and generators when pressurizing.
"""

import json

from utilities.blocks import DoorStatus
from utilities.logger import AirlockLogger
from utilities.palette import Palette

from .blocks import (
    SimAirVent,
    SimButtonPanel,
    SimDoor,
    SimGasGenerator,
    SimGasTank,
    SimLight,
    SimSensor,
)

DEFAULT_HABITAT_O2 = 0.95
DEFAULT_VENT_RATE = 0.05


def _parse_color(value):
    """Layout colours: a palette name, a palette index or an RGB list."""
    if isinstance(value, str):
        color = Palette.by_name(value)
        if color is None:
            raise ValueError(f"Unknown colour: {value!r}")
        return color
    if isinstance(value, int):
        return Palette.get_color(value)
    return tuple(value)


class SimChamber:
    """One airlock chamber's atmosphere and the doors that bound it."""
    def __init__(self, chamber_id, oxygen=DEFAULT_HABITAT_O2, habitat_o2=DEFAULT_HABITAT_O2,
                 vent_rate=DEFAULT_VENT_RATE):
        self.id = chamber_id
        self.oxygen = oxygen
        self.habitat_o2 = habitat_o2
        self.vent_rate = vent_rate
        self.inner = []
        self.outer = []
        self.vents = []

    @property
    def sealed(self):
        return all(d.status == DoorStatus.CLOSED for d in self.inner + self.outer)

    def step(self, tanks, generators):
        if any(d.status != DoorStatus.CLOSED for d in self.outer):
            self.oxygen = 0.0
            return
        if any(d.status != DoorStatus.CLOSED for d in self.inner):
            self.oxygen = self.habitat_o2
            return

        for vent in self.vents:
            if not vent.enabled:
                continue
            if vent.depressurize:
                self._drain(min(self.vent_rate, self.oxygen), tanks)
            else:
                self._fill(min(self.vent_rate, max(0.0, self.habitat_o2 - self.oxygen)), tanks, generators)

    def _drain(self, amount, tanks):
        for tank in tanks:
            if amount <= 0:
                break
            if not tank.enabled or not tank.stockpile:
                continue
            moved = tank.put(amount)
            self.oxygen -= moved
            amount -= moved

    def _fill(self, amount, tanks, generators):
        for source in tanks:
            if amount <= 0:
                return
            if not source.enabled or source.stockpile:
                continue
            moved = source.take(amount)
            self.oxygen += moved
            amount -= moved
        for gen in generators:
            if amount <= 0:
                return
            moved = gen.take(amount)
            self.oxygen += moved
            amount -= moved

    def __repr__(self):
        return f"SimChamber({self.id!r}, oxygen={self.oxygen:.3f})"


class SimGrid:
    """Every simulated block on one construct, plus the chambers."""

    KINDS = {
        "door": SimDoor,
        "vent": SimAirVent,
        "tank": SimGasTank,
        "generator": SimGasGenerator,
        "light": SimLight,
        "button": SimButtonPanel,
        "sensor": SimSensor,
    }

    def __init__(self):
        self._blocks = []
        self.chambers = {}
        self.tick_count = 0

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    def add_chamber(self, chamber):
        self.chambers[chamber.id] = chamber
        return chamber

    def add(self, block, chamber=None, side=None):
        """Add ``block``; doors may bound a chamber on the ``inner`` or ``outer`` side."""
        self._blocks.append(block)
        if chamber is None:
            return block
        if isinstance(block, SimDoor):
            if side == "inner":
                chamber.inner.append(block)
            elif side == "outer":
                chamber.outer.append(block)
            else:
                raise ValueError(f"Door '{block.custom_name}' needs side 'inner' or 'outer', got {side!r}")
        elif isinstance(block, SimAirVent):
            block.chamber = chamber
            chamber.vents.append(block)
        return block

    @classmethod
    def from_layout(cls, layout):
        """Build a grid from a layout dict (the parsed form of a layout JSON file)."""
        grid = cls()
        habitat_o2 = layout.get("habitat_o2", DEFAULT_HABITAT_O2)
        for entry in layout.get("chambers", []):
            grid.add_chamber(SimChamber(
                entry["id"],
                oxygen=entry.get("oxygen", habitat_o2),
                habitat_o2=habitat_o2,
                vent_rate=entry.get("vent_rate", DEFAULT_VENT_RATE),
            ))

        for entry in layout.get("blocks", []):
            entry = dict(entry)
            kind = entry.pop("kind", None)
            block_cls = cls.KINDS.get(kind)
            if block_cls is None:
                raise ValueError(f"Unknown block kind: {kind!r}")

            chamber_id = entry.pop("chamber", None)
            side = entry.pop("side", None)
            chamber = None
            if chamber_id is not None:
                chamber = grid.chambers.get(chamber_id)
                if chamber is None:
                    raise ValueError(f"Unknown chamber: {chamber_id!r}")

            name = entry.pop("name", "")
            if "color" in entry:
                entry["color"] = _parse_color(entry["color"])
            grid.add(block_cls(name, **entry), chamber=chamber, side=side)

        AirlockLogger.info("SIM", f"Grid built: {len(grid.chambers)} chambers, {len(grid._blocks)} blocks")
        return grid

    @classmethod
    def load(cls, path):
        """Read a layout JSON file. Errors propagate to the caller."""
        with open(path, "r", encoding="utf-8") as f:
            layout = json.load(f)
        AirlockLogger.info("SIM", f"Layout loaded from {path}")
        return cls.from_layout(layout)

    # ------------------------------------------------------------------
    # Runtime
    # ------------------------------------------------------------------

    def blocks(self):
        """Block source for the inventory."""
        return list(self._blocks)

    def find(self, name):
        for block in self._blocks:
            if block.custom_name == name:
                return block
        return None

    def step(self):
        """Advance physics by one tick."""
        for block in self._blocks:
            if isinstance(block, SimDoor):
                block.step()

        tanks = [b for b in self._blocks if isinstance(b, SimGasTank)]
        generators = [b for b in self._blocks if isinstance(b, SimGasGenerator)]
        for chamber in self.chambers.values():
            chamber.step(tanks, generators)
        self.tick_count += 1
