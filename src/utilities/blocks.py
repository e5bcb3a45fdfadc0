# File: src/utilities/blocks.py
"""Capability interfaces for the grid blocks the controller drives.

The controller only ever talks to these capabilities. Concrete blocks
(simulated in :mod:`sim`, or bridged from real hardware) subclass the
matching capability and fill in the state.
"""

import itertools

_entity_ids = itertools.count(1)


def next_entity_id():
    """Allocate a process-wide unique block handle."""
    return next(_entity_ids)


class DoorStatus:
    OPEN = "OPEN"
    CLOSED = "CLOSED"
    OPENING = "OPENING"
    CLOSING = "CLOSING"


class TerminalBlock:
    """Anything with a name on the grid.

    Attributes:
        custom_name (str): Player-facing name, carries the tags.
        entity_id (int): Stable integer handle, used as a dictionary key
            wherever per-block state is remembered.
        same_construct (bool): False once the block has been detached or
            belongs to another construct; such blocks are ignored.
    """
    def __init__(self, custom_name="", entity_id=None, same_construct=True):
        self.custom_name = custom_name
        self.entity_id = entity_id if entity_id is not None else next_entity_id()
        self.same_construct = same_construct

    def __repr__(self):
        return f"{self.__class__.__name__}({self.custom_name!r})"


class FunctionalBlock(TerminalBlock):
    """A block with an on/off switch."""
    def __init__(self, custom_name="", entity_id=None, same_construct=True, enabled=True):
        super().__init__(custom_name, entity_id, same_construct)
        self.enabled = enabled


class Door(FunctionalBlock):
    """Door capability: open(), close() and a DoorStatus."""

    def open(self):
        raise NotImplementedError("Subclasses must implement open().")

    def close(self):
        raise NotImplementedError("Subclasses must implement close().")

    @property
    def status(self):
        raise NotImplementedError("Subclasses must implement status.")


class AirVent(FunctionalBlock):
    """Air vent capability.

    ``depressurize`` is a plain writable flag; ``can_pressurize`` reports
    whether the room the vent serves is currently airtight.
    """
    def __init__(self, custom_name="", entity_id=None, same_construct=True, enabled=True):
        super().__init__(custom_name, entity_id, same_construct, enabled)
        self.depressurize = False

    def oxygen_level(self):
        raise NotImplementedError("Subclasses must implement oxygen_level().")

    @property
    def can_pressurize(self):
        raise NotImplementedError("Subclasses must implement can_pressurize.")


class GasTank(FunctionalBlock):
    """Oxygen tank capability. ``stockpile`` is capture mode."""
    def __init__(self, custom_name="", entity_id=None, same_construct=True, enabled=True):
        super().__init__(custom_name, entity_id, same_construct, enabled)
        self.stockpile = False

    @property
    def filled_ratio(self):
        raise NotImplementedError("Subclasses must implement filled_ratio.")


class GasGenerator(FunctionalBlock):
    """O2/H2 generator. Only its on/off switch is used."""


class LightingBlock(FunctionalBlock):
    """Lighting fixture with a colour and blink parameters."""
    def __init__(self, custom_name="", entity_id=None, same_construct=True, enabled=True,
                 color=(255, 255, 255), blink_interval=0.0, blink_length=0.0, blink_offset=0.0):
        super().__init__(custom_name, entity_id, same_construct, enabled)
        self.color = color
        self.blink_interval = blink_interval
        self.blink_length = blink_length
        self.blink_offset = blink_offset


class ButtonPanel(TerminalBlock):
    """Button panel next to a door. Discovered, not driven."""


class SensorBlock(TerminalBlock):
    """Presence sensor next to a door. Discovered, not driven."""
