# File: src/managers/cycle_manager.py
"""
CycleManager - the tick-driven airlock cycle state machine.

One step runs per scheduler tick. Waiting is never blocking: a phase sets
a dwell counter and the following ticks just count it down. Door, vent and
tank commands are re-issued every tick until the hardware reports the
expected state, so a slow actuator only delays a phase.

Enter:  SEAL -> ISOLATE -> DEPRESS_INIT -> DEPRESSURIZE -> OPEN_OUTER ->
        WAIT_OUTER -> CLOSE_OUTER -> PRESS_INIT -> PRESSURIZE ->
        OPEN_INNER -> WAIT_INNER -> CLOSE_INNER -> RESTORE -> DONE
Exit:   EXIT_OPEN_INNER -> EXIT_WAIT_IN -> EXIT_CLOSE_INNER -> SEAL -> ...
        -> PRESSURIZE -> RESTORE -> DONE
"""
from utilities import gas_policy
from utilities.blocks import DoorStatus
from utilities.logger import AirlockLogger

from .isolation_manager import TankMode


class Direction:
    ENTER = "ENTER"
    EXIT = "EXIT"


class Phase:
    IDLE = "IDLE"
    # Exit prelude: inner opens first (pressurized) so the occupant can step in
    EXIT_OPEN_INNER = "EXIT_OPEN_INNER"
    EXIT_WAIT_IN = "EXIT_WAIT_IN"
    EXIT_CLOSE_INNER = "EXIT_CLOSE_INNER"
    # Shared sequence
    SEAL = "SEAL"
    ISOLATE = "ISOLATE"
    DEPRESS_INIT = "DEPRESS_INIT"
    DEPRESSURIZE = "DEPRESSURIZE"
    OPEN_OUTER = "OPEN_OUTER"
    WAIT_OUTER = "WAIT_OUTER"
    CLOSE_OUTER = "CLOSE_OUTER"
    PRESS_INIT = "PRESS_INIT"
    PRESSURIZE = "PRESSURIZE"
    OPEN_INNER = "OPEN_INNER"
    WAIT_INNER = "WAIT_INNER"
    CLOSE_INNER = "CLOSE_INNER"
    RESTORE = "RESTORE"
    DONE = "DONE"


class CycleError:
    """Reasons returned by start/seal operations alongside the ok flag."""
    OK = "OK"
    UNKNOWN_AIRLOCK = "UNKNOWN_AIRLOCK"
    BUSY = "BUSY"
    NO_PROCESS_TANK = "NO_PROCESS_TANK"


class CycleContext:
    """State of the one in-flight cycle."""
    def __init__(self, record, direction, phase, tank):
        self.airlock_id = record.id
        self.record = record
        self.direction = direction
        self.phase = phase
        self.tank = tank

        self.wait = 0       # dwell ticks still to burn
        self.timeout = 0    # ticks spent in the current phase
        self.stable = 0     # consecutive flat-or-rising O2 ticks

        self.start_o2 = 0.0
        self.last_o2 = 0.0
        self.proc_start = 0.0
        self.proc_last = 0.0

        self.light_backup = {}  # entity_id -> LightState

    def __repr__(self):
        return f"CycleContext({self.airlock_id!r}, {self.direction}, {self.phase})"


class CycleManager:
    """
    Runs at most one airlock cycle at a time.

    Start operations return ``(ok, reason)`` with a :class:`CycleError`
    reason; they never raise and never touch a cycle already in flight.
    """
    def __init__(self, inventory, isolation, effects, settings):
        AirlockLogger.info("CYCL", "[INIT] CycleManager")
        self.inventory = inventory
        self.isolation = isolation
        self.effects = effects
        self.settings = settings
        self.context = None

        self._handlers = {
            Phase.EXIT_OPEN_INNER: self._exit_open_inner,
            Phase.EXIT_WAIT_IN: self._exit_wait_in,
            Phase.EXIT_CLOSE_INNER: self._exit_close_inner,
            Phase.SEAL: self._seal,
            Phase.ISOLATE: self._isolate,
            Phase.DEPRESS_INIT: self._depress_init,
            Phase.DEPRESSURIZE: self._depressurize,
            Phase.OPEN_OUTER: self._open_outer,
            Phase.WAIT_OUTER: self._wait_outer,
            Phase.CLOSE_OUTER: self._close_outer,
            Phase.PRESS_INIT: self._press_init,
            Phase.PRESSURIZE: self._pressurize,
            Phase.OPEN_INNER: self._open_inner,
            Phase.WAIT_INNER: self._wait_inner,
            Phase.CLOSE_INNER: self._close_inner,
            Phase.RESTORE: self._restore,
            Phase.DONE: self._done,
        }

    @property
    def active(self):
        return self.context is not None

    @property
    def phase(self):
        return self.context.phase if self.context is not None else Phase.IDLE

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def start_enter(self, airlock_id):
        """Cycle from vacuum into the habitat."""
        return self._start(airlock_id, Direction.ENTER, Phase.SEAL)

    def start_exit(self, airlock_id):
        """Cycle from the habitat out to vacuum."""
        return self._start(airlock_id, Direction.EXIT, Phase.EXIT_OPEN_INNER)

    def _start(self, airlock_id, direction, first_phase):
        record = self.inventory.get_airlock(airlock_id)
        if record is None:
            AirlockLogger.warning("CYCL", f"Unknown ID: {airlock_id}")
            return False, CycleError.UNKNOWN_AIRLOCK
        if self.context is not None:
            AirlockLogger.warning("CYCL", f"Busy: {self.context.airlock_id} still cycling")
            return False, CycleError.BUSY
        tank = self.inventory.pick_process_tank(record)
        if tank is None:
            AirlockLogger.warning("CYCL", f"No ProcessTank for {airlock_id}")
            return False, CycleError.NO_PROCESS_TANK

        self.context = CycleContext(record, direction, first_phase, tank)
        AirlockLogger.info("CYCL", f"Start {direction} {record.id} using tank '{tank.custom_name}'")
        return True, CycleError.OK

    def seal_only(self, airlock_id):
        """Close both door sets and stop depressurizing, outside any cycle."""
        record = self.inventory.get_airlock(airlock_id)
        if record is None:
            AirlockLogger.warning("CYCL", f"Unknown ID: {airlock_id}")
            return False, CycleError.UNKNOWN_AIRLOCK
        self.close_all(record.inner)
        self.close_all(record.outer)
        self.set_depressurize(record.vents, False)
        AirlockLogger.info("CYCL", f"Sealed {record.id}")
        return True, CycleError.OK

    def tick(self):
        """Advance the active cycle by one step."""
        ctx = self.context
        if ctx is None:
            return

        AirlockLogger.debug(
            "CYCL",
            f"[{ctx.airlock_id}] {ctx.direction} -> {ctx.phase} t={ctx.timeout} "
            f"O2={gas_policy.room_o2(ctx.record):.2f}"
        )

        if ctx.wait > 0:
            ctx.wait -= 1
            return

        self._handlers[ctx.phase](ctx)

    def _next(self, phase, delay):
        ctx = self.context
        ctx.phase = phase
        ctx.wait = delay
        ctx.timeout = 0

    def _converged(self, ctx, done, what):
        """Door phases: done, or give up waiting once the safety cap is hit."""
        ctx.timeout += 1
        if done:
            return True
        if ctx.timeout >= self.settings.TIMEOUT_TICKS:
            AirlockLogger.warning("CYCL", f"{ctx.airlock_id}: {what} not confirmed after {ctx.timeout} ticks, continuing")
            return True
        return False

    # ------------------------------------------------------------------
    # Phases
    # ------------------------------------------------------------------

    def _exit_open_inner(self, ctx):
        self.close_all(ctx.record.outer)
        self.set_depressurize(ctx.record.vents, False)
        self.open_all(ctx.record.inner)
        if self._converged(ctx, self.all_open(ctx.record.inner), "inner doors open"):
            self._next(Phase.EXIT_WAIT_IN, self.settings.WAIT_PASS)

    def _exit_wait_in(self, ctx):
        self._next(Phase.EXIT_CLOSE_INNER, self.settings.WAIT_SHORT)

    def _exit_close_inner(self, ctx):
        self.close_all(ctx.record.inner)
        if self._converged(ctx, self.all_closed(ctx.record.inner), "inner doors closed"):
            self._next(Phase.SEAL, 1)

    def _seal(self, ctx):
        self.close_all(ctx.record.inner)
        self.close_all(ctx.record.outer)
        self.set_depressurize(ctx.record.vents, False)
        sealed = self.all_closed(ctx.record.inner) and self.all_closed(ctx.record.outer)
        if self._converged(ctx, sealed, "airlock sealed"):
            self._next(Phase.ISOLATE, 1)

    def _isolate(self, ctx):
        self.isolation.isolate(ctx.tank, TankMode.CAPTURE)

        ctx.timeout = 0
        ctx.stable = 0
        ctx.start_o2 = gas_policy.room_o2(ctx.record)
        ctx.last_o2 = ctx.start_o2
        ctx.proc_start = gas_policy.proc_fill(ctx.tank)
        ctx.proc_last = ctx.proc_start

        ctx.light_backup = self.effects.snapshot(ctx.record.lights)
        self.effects.apply_alert(ctx.record.lights)
        self._next(Phase.DEPRESS_INIT, 1)

    def _depress_init(self, ctx):
        self.set_depressurize(ctx.record.vents, True)
        self._next(Phase.DEPRESSURIZE, self.settings.SETTLE_TICKS)

    def _depressurize(self, ctx):
        s = self.settings
        ctx.timeout += 1
        self.set_depressurize(ctx.record.vents, True)
        if ctx.timeout == 1:
            self.isolation.check(ctx.airlock_id, ctx.tank, TankMode.CAPTURE)

        o2 = gas_policy.room_o2(ctx.record)
        fill = gas_policy.proc_fill(ctx.tank)
        capturing = gas_policy.is_capturing(ctx.last_o2, o2, ctx.proc_last, fill, s)
        ctx.last_o2 = o2
        ctx.proc_last = fill

        if gas_policy.depressurize_complete(ctx.timeout, o2, capturing, s):
            if ctx.timeout >= s.TIMEOUT_TICKS and o2 > s.VAC_OK:
                AirlockLogger.warning("CYCL", f"{ctx.airlock_id}: depressurize timed out at O2={o2:.2f}, opening outer anyway")
            self._next(Phase.OPEN_OUTER, 1)
        elif ctx.timeout % s.STALL_WARN_INTERVAL == 0 and not capturing:
            AirlockLogger.warning("CYCL", f"WARN {ctx.airlock_id}: No capture - check conveyor path & OXYGEN tank.")

    def _open_outer(self, ctx):
        self.open_all(ctx.record.outer)
        if self._converged(ctx, self.all_open(ctx.record.outer), "outer doors open"):
            self._next(Phase.WAIT_OUTER, self.settings.WAIT_PASS)

    def _wait_outer(self, ctx):
        self._next(Phase.CLOSE_OUTER, self.settings.WAIT_SHORT)

    def _close_outer(self, ctx):
        self.close_all(ctx.record.outer)
        if self._converged(ctx, self.all_closed(ctx.record.outer), "outer doors closed"):
            # Captured gas now flows back out
            self.isolation.set_tank_mode(ctx.tank, TankMode.SUPPLY)
            self._next(Phase.PRESS_INIT, self.settings.SETTLE_TICKS)

    def _press_init(self, ctx):
        self.set_depressurize(ctx.record.vents, False)
        # Baseline after supply is live, not the vacuum reading
        ctx.start_o2 = gas_policy.room_o2(ctx.record)
        ctx.last_o2 = ctx.start_o2
        ctx.timeout = 0
        ctx.stable = 0
        self._next(Phase.PRESSURIZE, 1)

    def _pressurize(self, ctx):
        s = self.settings
        if ctx.timeout == 0:
            self.isolation.check(ctx.airlock_id, ctx.tank, TankMode.SUPPLY)

        self.isolation.hold(ctx.tank, TankMode.SUPPLY)

        o2 = gas_policy.room_o2(ctx.record)
        ctx.stable = gas_policy.update_stability(ctx.stable, ctx.last_o2, o2, s)
        ctx.last_o2 = o2
        ctx.timeout += 1

        can_pressurize = gas_policy.any_vent_can_pressurize(ctx.record)
        if gas_policy.pressurize_complete(ctx.timeout, o2, ctx.start_o2, ctx.stable, can_pressurize, s):
            if ctx.timeout >= s.TIMEOUT_TICKS and o2 < s.PRESS_OK:
                AirlockLogger.warning("CYCL", f"{ctx.airlock_id}: pressurize timed out at O2={o2:.2f}")
            if ctx.direction == Direction.ENTER:
                self._next(Phase.OPEN_INNER, 1)
            else:
                self._next(Phase.RESTORE, 1)

    def _open_inner(self, ctx):
        self.open_all(ctx.record.inner)
        if self._converged(ctx, self.all_open(ctx.record.inner), "inner doors open"):
            self._next(Phase.WAIT_INNER, self.settings.WAIT_PASS)

    def _wait_inner(self, ctx):
        self._next(Phase.CLOSE_INNER, self.settings.WAIT_SHORT)

    def _close_inner(self, ctx):
        self.close_all(ctx.record.inner)
        if self._converged(ctx, self.all_closed(ctx.record.inner), "inner doors closed"):
            self._next(Phase.RESTORE, 1)

    def _restore(self, ctx):
        self.set_depressurize(ctx.record.vents, False)
        self.effects.restore(ctx.record.lights, ctx.light_backup)
        self.isolation.restore(ctx.tank)
        self.disable_doors(ctx.record.inner)
        self.disable_doors(ctx.record.outer)
        self._next(Phase.DONE, 1)

    def _done(self, ctx):
        AirlockLogger.note("CYCL", f"Done {ctx.airlock_id} ({ctx.direction})")
        self.context = None

    # ------------------------------------------------------------------
    # Door and vent helpers
    # ------------------------------------------------------------------

    def ensure_door_ctrl(self, door):
        """With manual lock on, re-enable a door before commanding it."""
        if self.settings.LOCK_MANUAL and not door.enabled:
            door.enabled = True

    def open_all(self, doors):
        for door in doors:
            self.ensure_door_ctrl(door)
            door.open()

    def close_all(self, doors):
        for door in doors:
            self.ensure_door_ctrl(door)
            door.close()

    def disable_doors(self, doors):
        """With manual lock on, leave doors switched off so only cycles move them."""
        if self.settings.LOCK_MANUAL:
            for door in doors:
                door.enabled = False

    @staticmethod
    def all_open(doors):
        return all(d.status == DoorStatus.OPEN for d in doors)

    @staticmethod
    def all_closed(doors):
        return all(d.status == DoorStatus.CLOSED for d in doors)

    @staticmethod
    def set_depressurize(vents, depressurize):
        for vent in vents:
            if vent.depressurize != depressurize:
                vent.depressurize = depressurize
