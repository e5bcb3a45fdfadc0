# File: src/managers/__init__.py
"""Top-level package for manager classes."""

from .auto_close_manager import AutoCloseManager
from .console_manager import ConsoleManager
from .cycle_manager import CycleManager, CycleError, Direction, Phase
from .effect_manager import EffectManager
from .inventory_manager import InventoryManager, AirlockRecord
from .isolation_manager import IsolationManager, TankMode
from .tick_manager import TickManager

__all__ = [
    "AirlockRecord",
    "AutoCloseManager",
    "ConsoleManager",
    "CycleError",
    "CycleManager",
    "Direction",
    "EffectManager",
    "InventoryManager",
    "IsolationManager",
    "Phase",
    "TankMode",
    "TickManager",
]
