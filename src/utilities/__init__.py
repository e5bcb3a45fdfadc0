# File: src/utilities/__init__.py
"""Utility modules for the airlock controller."""

from .blocks import (
    AirVent,
    ButtonPanel,
    Door,
    DoorStatus,
    FunctionalBlock,
    GasGenerator,
    GasTank,
    LightingBlock,
    SensorBlock,
    TerminalBlock,
)
from .logger import AirlockLogger, LogLevel
from .palette import Color, Palette
from .settings import AirlockSettings, load_config
from .tags import tags_of, split_parts, has_flag

__all__ = [
    'AirVent',
    'ButtonPanel',
    'Door',
    'DoorStatus',
    'FunctionalBlock',
    'GasGenerator',
    'GasTank',
    'LightingBlock',
    'SensorBlock',
    'TerminalBlock',
    'AirlockLogger',
    'LogLevel',
    'Color',
    'Palette',
    'AirlockSettings',
    'load_config',
    'tags_of',
    'split_parts',
    'has_flag',
    ]
