# File: src/managers/tick_manager.py
import time
import asyncio
from adafruit_ticks import ticks_ms, ticks_diff
from utilities.logger import AirlockLogger

class TickManager:
    """
    Runs the fixed-period controller tick.

    Every tick calls the registered tasks once, in registration order. Tasks
    are plain callables; nothing here awaits them, so a tick can never be
    suspended half way through.
    """
    MIN_SLEEP_DURATION = 0.005  # Minimum sleep to prevent event loop starvation
    OVERRUN_WARN_INTERVAL = 60  # Ticks between repeated overrun warnings

    def __init__(self, ticks_per_second=6):
        AirlockLogger.info("TICK", f"[INIT] TickManager - rate: {ticks_per_second}/s")
        self.ticks_per_second = ticks_per_second
        self._tasks = []

        self.tick_count = 0
        self.overruns = 0
        self._last_overrun_warn = None
        self.running = False

    def add_task(self, task):
        """Register a callable to run once per tick. Registering it again is a no-op."""
        name = getattr(task, "__qualname__", task.__class__.__name__)
        if task in self._tasks:
            AirlockLogger.debug("TICK", f"Task already registered: {name}")
            return
        AirlockLogger.debug("TICK", f"Adding task: {name}")
        self._tasks.append(task)

    @property
    def period(self):
        return 1.0 / self.ticks_per_second

    def tick(self):
        """Run every task once."""
        for task in self._tasks:
            task()
        self.tick_count += 1

    def stop(self):
        self.running = False

    async def run(self, max_ticks=None):
        """Fixed time step loop.

        Runs until :meth:`stop` is called or ``max_ticks`` ticks have run.
        A tick that takes longer than the period is not made up; the schedule
        restarts from now and a throttled warning is logged.
        """
        self.running = True
        next_tick_time = time.monotonic()
        ticks_run = 0

        while self.running:
            if max_ticks is not None and ticks_run >= max_ticks:
                break

            started = ticks_ms()
            self.tick()
            ticks_run += 1
            elapsed_ms = ticks_diff(ticks_ms(), started)

            next_tick_time += self.period
            now = time.monotonic()
            sleep_duration = next_tick_time - now

            if sleep_duration > 0:
                await asyncio.sleep(sleep_duration)
            else:
                # Lagging: reset schedule and yield briefly
                self.overruns += 1
                next_tick_time = now
                if (self._last_overrun_warn is None
                        or self.tick_count - self._last_overrun_warn >= self.OVERRUN_WARN_INTERVAL):
                    AirlockLogger.warning(
                        "TICK",
                        f"Tick {self.tick_count} overran {self.period * 1000:.0f}ms period "
                        f"(took {elapsed_ms}ms, {self.overruns} overruns)"
                    )
                    self._last_overrun_warn = self.tick_count
                await asyncio.sleep(self.MIN_SLEEP_DURATION)

        self.running = False
        AirlockLogger.debug("TICK", f"Loop stopped after {ticks_run} ticks")
