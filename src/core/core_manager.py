# File: src/core/core_manager.py
"""
Core Manager for the airlock controller.

Owns every piece of controller state and wires the managers together.
Nothing here is global: a second CoreManager over another block source is
fully independent.
"""

from managers import (
    AutoCloseManager,
    ConsoleManager,
    CycleError,
    CycleManager,
    EffectManager,
    InventoryManager,
    IsolationManager,
    TickManager,
)
from managers.console_manager import USAGE
from utilities import AirlockLogger, AirlockSettings


class CoreManager:
    """Class to hold controller state for one grid.

    Public Interface:
        inventory: InventoryManager - discovered airlocks, base tanks, generators
        cycle: CycleManager - the single in-flight cycle, if any
        auto_close: AutoCloseManager - per-door open timers
        ticker: TickManager - fixed-period loop; :meth:`tick` is registered on it
        console: ConsoleManager - text command surface
    """
    def __init__(self, block_source, config=None, stream=None):
        if config is None:
            config = {}

        self.settings = AirlockSettings(config.get("airlock", {}))

        self.inventory = InventoryManager(block_source, self.settings)
        self.isolation = IsolationManager(self.inventory)
        self.effects = EffectManager()
        self.cycle = CycleManager(self.inventory, self.isolation, self.effects, self.settings)
        self.auto_close = AutoCloseManager(self.settings)
        self.ticker = TickManager(self.settings.TICKS_PER_SECOND)
        self.console = ConsoleManager(self, stream=stream)

        self.startup()

    def startup(self):
        """One-time discovery and idle isolation."""
        self.inventory.refresh()
        self.isolation.disable_all_process_tanks()
        for rec in self.inventory.airlocks():
            self.cycle.disable_doors(rec.inner)
            self.cycle.disable_doors(rec.outer)
        self.auto_close.refresh(self.inventory.auto_close_doors)
        AirlockLogger.info("CORE", USAGE)

    def rescan(self):
        """Rebuild the inventory. Refused while a cycle holds the current one."""
        if self.cycle.active:
            AirlockLogger.warning("CORE", "Rescan refused: cycle in progress")
            return False, CycleError.BUSY
        self.inventory.refresh()
        self.isolation.disable_all_process_tanks()
        self.auto_close.refresh(self.inventory.auto_close_doors)
        return True, CycleError.OK

    def tick(self):
        """One scheduler tick: auto-close first, then the cycle step."""
        self.auto_close.tick()
        self.cycle.tick()

    def handle_command(self, text):
        return self.console.handle(text)

    async def run(self, max_ticks=None):
        """Register the tick and the console poll, then run the loop.

        Safe to call again after the loop stops; the tasks are only
        registered once.
        """
        self.ticker.add_task(self.tick)
        self.ticker.add_task(self.console.poll)
        await self.ticker.run(max_ticks=max_ticks)
