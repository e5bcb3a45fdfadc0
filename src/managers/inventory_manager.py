# File: src/managers/inventory_manager.py
"""Discovers airlocks, supply tanks and generators from tagged block names."""

from utilities.blocks import (
    AirVent,
    ButtonPanel,
    Door,
    GasGenerator,
    GasTank,
    LightingBlock,
    SensorBlock,
)
from utilities.logger import AirlockLogger
from utilities.tags import tags_of, has_flag, get_int

# Second tag part that declares an airlock id
AIRLOCK_KINDS = (
    "INNER", "OUTER", "VENT",
    "INNERBUTTON", "OUTERBUTTON",
    "INNERSENSOR", "OUTERSENSOR",
    "LIGHT", "PROCESSTANK",
)

BASE_TANK_FLAG = "BASETANK"
GENERATOR_FLAG = "O2H2"
AUTO_CLOSE_OPT_OUT = ("NOAUTOCLOSE", "KEEPOPEN")
AUTO_CLOSE_TAG = "AUTOCLOSE"


class AirlockRecord:
    """Everything tagged with one airlock id. Read-only during a cycle."""
    def __init__(self, airlock_id):
        self.id = airlock_id
        self.inner = []            # habitat side
        self.outer = []            # vacuum side
        self.vents = []
        self.buttons_inner = []
        self.buttons_outer = []
        self.sensors_inner = []
        self.sensors_outer = []
        self.lights = []
        self.process_tanks = []

    def __repr__(self):
        return f"AirlockRecord({self.id!r})"


class InventoryManager:
    """
    Owns the discovered block inventory.

    The inventory is rebuilt wholesale by :meth:`refresh` from a block
    source (a callable returning every block on the grid); between
    refreshes it is never mutated.
    """
    def __init__(self, block_source, settings):
        AirlockLogger.info("INVT", "[INIT] InventoryManager")
        self._block_source = block_source
        self.settings = settings

        self._locks = {}          # upper-cased id -> AirlockRecord
        self.base_tanks = []
        self.generators = []
        self.auto_close_doors = []  # (door, limit_ticks)

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def get_airlock(self, airlock_id):
        """Return the record for ``airlock_id`` (case-insensitive) or None."""
        if airlock_id is None:
            return None
        return self._locks.get(airlock_id.upper())

    def airlock_ids(self):
        return [rec.id for rec in self._locks.values()]

    def airlocks(self):
        return list(self._locks.values())

    def all_process_tanks(self):
        """Every process tank across every lock, each listed once."""
        seen = set()
        tanks = []
        for rec in self._locks.values():
            for tank in rec.process_tanks:
                if tank.entity_id not in seen:
                    seen.add(tank.entity_id)
                    tanks.append(tank)
        return tanks

    def airlock_doors(self):
        doors = []
        for rec in self._locks.values():
            doors.extend(rec.inner)
            doors.extend(rec.outer)
        return doors

    def pick_process_tank(self, record, prefer_fullest=False):
        """Choose the emptiest (or fullest) same-construct process tank.

        Ties go to the first discovered tank. Returns None if the lock has
        no usable tank.
        """
        candidates = [t for t in record.process_tanks if t is not None and t.same_construct]
        if not candidates:
            return None
        best = candidates[0]
        best_val = best.filled_ratio
        for tank in candidates[1:]:
            val = tank.filled_ratio
            if (val > best_val) if prefer_fullest else (val < best_val):
                best, best_val = tank, val
        return best

    # ------------------------------------------------------------------
    # Discovery
    # ------------------------------------------------------------------

    def refresh(self):
        """Rescan the grid and replace every map in one go."""
        blocks = list(self._block_source())

        locks = {}
        for block in blocks:
            for tag in tags_of(block.custom_name):
                if len(tag) >= 2 and tag[1].upper() in AIRLOCK_KINDS:
                    key = tag[0].upper()
                    if key not in locks:
                        locks[key] = AirlockRecord(tag[0])

        base_tanks = []
        generators = []
        claimed_doors = set()
        for block in blocks:
            if not block.same_construct:
                continue

            if isinstance(block, GasTank) and has_flag(block.custom_name, BASE_TANK_FLAG):
                base_tanks.append(block)
            if isinstance(block, GasGenerator) and has_flag(block.custom_name, GENERATOR_FLAG):
                generators.append(block)

            for tag in tags_of(block.custom_name):
                if len(tag) < 2:
                    continue
                rec = locks.get(tag[0].upper())
                if rec is None:
                    continue
                self._assign(rec, block, tag[1].upper(), claimed_doors)

        if not base_tanks:
            process_ids = {t.entity_id for rec in locks.values() for t in rec.process_tanks}
            for block in blocks:
                if isinstance(block, GasTank) and block.same_construct and block.entity_id not in process_ids:
                    base_tanks.append(block)

        self._locks = locks
        self.base_tanks = base_tanks
        self.generators = generators
        self.auto_close_doors = self._collect_auto_close(blocks)

        AirlockLogger.info(
            "INVT",
            f"Scan complete: {len(locks)} airlocks, {len(base_tanks)} base tanks, "
            f"{len(generators)} generators, {len(self.auto_close_doors)} auto-close doors"
        )

    def _assign(self, rec, block, kind, claimed_doors):
        """File one tagged block into its airlock record by capability."""
        if isinstance(block, Door):
            if kind not in ("INNER", "OUTER"):
                return
            # A door serves exactly one side of one lock
            if block.entity_id in claimed_doors:
                AirlockLogger.warning("INVT", f"Door '{block.custom_name}' already assigned, ignoring [{rec.id}:{kind}]")
                return
            claimed_doors.add(block.entity_id)
            if kind == "INNER":
                rec.inner.append(block)
            else:
                rec.outer.append(block)
        elif isinstance(block, AirVent):
            if kind == "VENT":
                rec.vents.append(block)
        elif isinstance(block, GasTank):
            if kind == "PROCESSTANK":
                rec.process_tanks.append(block)
        elif isinstance(block, LightingBlock):
            if kind == "LIGHT":
                rec.lights.append(block)
        elif isinstance(block, ButtonPanel):
            if kind == "INNERBUTTON":
                rec.buttons_inner.append(block)
            elif kind == "OUTERBUTTON":
                rec.buttons_outer.append(block)
        elif isinstance(block, SensorBlock):
            if kind == "INNERSENSOR":
                rec.sensors_inner.append(block)
            elif kind == "OUTERSENSOR":
                rec.sensors_outer.append(block)

    def _collect_auto_close(self, blocks):
        """Pair every non-airlock door with its open-time limit in ticks."""
        airlock_ids = {d.entity_id for rec in self._locks.values() for d in rec.inner + rec.outer}
        default_ticks = self.settings.auto_close_default_ticks
        doors = []
        for block in blocks:
            if not isinstance(block, Door) or not block.same_construct:
                continue
            if block.entity_id in airlock_ids:
                continue

            skip = False
            limit = default_ticks
            for tag in tags_of(block.custom_name):
                key = tag[0].upper()
                if key in AUTO_CLOSE_OPT_OUT:
                    skip = True
                    break
                if key == AUTO_CLOSE_TAG and len(tag) >= 2:
                    seconds = get_int(tag, 1)
                    if seconds is not None and seconds > 0:
                        limit = seconds * self.settings.TICKS_PER_SECOND
            if not skip:
                doors.append((block, limit))
        return doors
