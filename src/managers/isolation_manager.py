# File: src/managers/isolation_manager.py
"""Supply isolation: decides which gas sources are live during a cycle."""

from utilities.logger import AirlockLogger


class TankMode:
    OFF = "OFF"
    CAPTURE = "CAPTURE"   # enabled + stockpile
    SUPPLY = "SUPPLY"     # enabled, not stockpiling


def set_enabled(blocks, on):
    """Switch a group of functional blocks on or off. Re-issuing is a no-op."""
    for block in blocks:
        if block.enabled != on:
            block.enabled = on


class IsolationManager:
    """
    Toggles base tanks, generators and process tanks.

    While a cycle holds a lock, the selected process tank is the only gas
    path: everything else is switched off by :meth:`isolate` and switched
    back on by :meth:`restore`.
    """
    def __init__(self, inventory):
        AirlockLogger.info("ISO", "[INIT] IsolationManager")
        self.inventory = inventory

    def disable_generators(self):
        set_enabled(self.inventory.generators, False)

    def enable_generators(self):
        set_enabled(self.inventory.generators, True)

    def set_base_tanks(self, on):
        set_enabled(self.inventory.base_tanks, on)

    def disable_all_process_tanks(self):
        """Declamp and switch off every process tank across every lock."""
        for tank in self.inventory.all_process_tanks():
            if tank is not None and tank.same_construct:
                self.set_tank_mode(tank, TankMode.OFF)

    @staticmethod
    def set_tank_mode(tank, mode):
        """Put ``tank`` into OFF, CAPTURE or SUPPLY."""
        stockpile = mode == TankMode.CAPTURE
        enabled = mode != TankMode.OFF
        if tank.stockpile != stockpile:
            tank.stockpile = stockpile
        if tank.enabled != enabled:
            tank.enabled = enabled

    @staticmethod
    def tank_mode(tank):
        """Read back the mode a tank is actually in."""
        if not tank.enabled:
            return TankMode.OFF
        return TankMode.CAPTURE if tank.stockpile else TankMode.SUPPLY

    def isolate(self, tank, mode=TankMode.CAPTURE):
        """Make ``tank`` the sole gas path, in ``mode``."""
        self.disable_generators()
        self.set_base_tanks(False)
        self.disable_all_process_tanks()
        self.set_tank_mode(tank, mode)

    def hold(self, tank, mode):
        """Re-assert isolation every tick without touching other process tanks."""
        self.set_tank_mode(tank, mode)
        self.set_base_tanks(False)
        self.disable_generators()

    def restore(self, tank):
        """Return ``tank`` to OFF and hand supply back to base tanks and generators."""
        self.set_tank_mode(tank, TankMode.OFF)
        self.set_base_tanks(True)
        self.enable_generators()

    def check(self, airlock_id, tank, expected_mode):
        """Compare actual against expected isolation and log a corrective hint.

        Returns True when the selected tank is in ``expected_mode`` and no base
        tank is on. Never raises; this is a diagnostic only.
        """
        base_on = sum(1 for t in self.inventory.base_tanks if t.enabled)
        actual = self.tank_mode(tank)
        AirlockLogger.info(
            "ISO",
            f"ISO {airlock_id}: baseOn={base_on}, procOn={int(tank.enabled)}, "
            f"procStockpile={int(tank.stockpile)}"
        )
        if actual == expected_mode and base_on == 0:
            return True
        if expected_mode == TankMode.CAPTURE:
            AirlockLogger.warning("ISO", "  -> Need proc: ON+STOCKPILE and all base tanks OFF")
        else:
            AirlockLogger.warning("ISO", "  -> Need proc: ON (not stockpile) and all base tanks OFF")
        return False
