#!/usr/bin/env python3
"""Unit tests for CoreManager lifecycle."""

import io

import pytest

from core.core_manager import CoreManager
from managers.cycle_manager import CycleError, Phase
from managers.isolation_manager import IsolationManager, TankMode
from utilities.blocks import DoorStatus

from test_helpers import MockDoor, MockTank, make_grid


def _core(blocks, **airlock):
    return CoreManager(lambda: list(blocks.values()), config={"airlock": airlock}, stream=io.StringIO())


def test_startup_isolates_process_tanks():
    blocks = make_grid()
    blocks["tank"].stockpile = True
    _core(blocks)
    assert IsolationManager.tank_mode(blocks["tank"]) == TankMode.OFF
    assert blocks["base"].enabled, "Base tanks are not touched at startup"


def test_startup_manual_lock_disables_airlock_doors_only():
    blocks = make_grid()
    _core(blocks, LOCK_MANUAL=True)
    assert not blocks["inner"].enabled
    assert not blocks["outer"].enabled
    assert blocks["galley"].enabled


def test_startup_without_manual_lock_leaves_doors():
    blocks = make_grid()
    _core(blocks)
    assert blocks["inner"].enabled and blocks["outer"].enabled


def test_config_reaches_settings():
    core = _core(make_grid(), WAIT_PASS=5, TICKS_PER_SECOND=10)
    assert core.settings.WAIT_PASS == 5
    assert core.ticker.ticks_per_second == 10


def test_tick_runs_auto_close_and_cycle():
    blocks = make_grid()
    blocks["galley"].status = DoorStatus.OPEN
    core = _core(blocks)
    core.cycle.start_enter("A1")
    for _ in range(30):
        core.tick()
    assert blocks["galley"].status == DoorStatus.CLOSED
    assert core.cycle.phase not in (Phase.IDLE, Phase.SEAL)


def test_rescan_picks_up_new_blocks():
    blocks = make_grid()
    core = _core(blocks)
    blocks["new_tank"] = MockTank("New [B7:PROCESSTANK]")
    blocks["new_tank"].stockpile = True
    blocks["new_door"] = MockDoor("Door [B7:OUTER]")
    blocks["workshop"] = MockDoor("Workshop")
    assert core.rescan() == (True, CycleError.OK)
    assert core.inventory.get_airlock("B7") is not None
    assert IsolationManager.tank_mode(blocks["new_tank"]) == TankMode.OFF
    assert len(core.auto_close.entries) == 2


def test_rescan_refused_while_cycling():
    blocks = make_grid()
    core = _core(blocks)
    core.cycle.start_enter("A1")
    blocks["workshop"] = MockDoor("Workshop")
    assert core.rescan() == (False, CycleError.BUSY)
    assert len(core.auto_close.entries) == 1, "Inventory must not change during a cycle"


def test_handle_command_delegates_to_console():
    core = _core(make_grid())
    assert core.handle_command("").startswith("[Discovery Summary]")


@pytest.mark.asyncio
async def test_run_twice_does_not_double_tick():
    blocks = make_grid()
    core = _core(blocks, TICKS_PER_SECOND=500)
    blocks["galley"].status = DoorStatus.OPEN
    await core.run(max_ticks=3)
    await core.run(max_ticks=3)
    assert core.ticker.tick_count == 6
    assert core.auto_close.entries[0].counter == 6, "Each loop tick must run the core tick exactly once"
