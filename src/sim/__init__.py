# File: src/sim/__init__.py
"""
Simulated grid for running the controller without hardware.

The blocks here implement the capabilities in :mod:`utilities.blocks` over
plain in-memory state, and :class:`SimGrid` steps a simple gas model once
per tick. Used by the entry point and by the scenario tests.
"""

from .blocks import (
    SimAirVent,
    SimButtonPanel,
    SimDoor,
    SimGasGenerator,
    SimGasTank,
    SimLight,
    SimSensor,
)
from .grid import SimChamber, SimGrid

__all__ = [
    "SimAirVent",
    "SimButtonPanel",
    "SimChamber",
    "SimDoor",
    "SimGasGenerator",
    "SimGasTank",
    "SimGrid",
    "SimLight",
    "SimSensor",
]
