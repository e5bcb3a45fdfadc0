#!/usr/bin/env python3
"""Unit tests for ConsoleManager command dispatch and reports."""

import io

from core.core_manager import CoreManager
from managers.console_manager import USAGE, ConsoleManager, serial_bytes_available
from managers.cycle_manager import Phase
from utilities.blocks import DoorStatus

from test_helpers import make_grid


class TestConsoleManager:
    def setup_method(self):
        self.blocks = make_grid()
        self.core = CoreManager(lambda: list(self.blocks.values()), stream=io.StringIO())
        self.console = self.core.console

    def test_empty_is_summary(self):
        out = self.console.handle("")
        assert out.startswith("[Discovery Summary]")
        assert (" - A1: Inner=1, Outer=1, Vents=1, ButtonsInner=0, ButtonsOuter=1, "
                "SensorsInner=1, SensorsOuter=0, Lights=1, ProcessTanks=1") in out
        assert "BaseTanks=1, O2H2=1" in out
        assert "AutoCloseDoors=1" in out
        assert self.console.handle(None) == out
        assert self.console.handle("   ") == out
        print("✓ Summary test passed")

    def test_list_is_details(self):
        out = self.console.handle("LIST")
        lines = out.splitlines()
        assert lines[0] == "[Discovery Details]"
        assert "> A1" in lines
        assert "  Inner (1): Inner Door [A1:INNER]" in lines
        assert "  ButtonsInner (0): (none)" in lines
        assert "BaseTanks (1): Main O2 [BASETANK]" in lines
        assert "O2H2 (1): Generator [O2H2]" in lines

    def test_enter_and_busy(self):
        assert self.console.handle("enter a1") == "Enter a1 started"
        assert self.core.cycle.phase == Phase.SEAL
        assert self.console.handle("Exit A1") == "Busy: a cycle is already running"

    def test_exit(self):
        assert self.console.handle("exit A1") == "Exit A1 started"
        assert self.core.cycle.phase == Phase.EXIT_OPEN_INNER

    def test_unknown_id(self):
        assert self.console.handle("enter Z9") == "Unknown ID: Z9"
        assert self.console.handle("test Z9") == "Unknown ID: Z9"

    def test_test_seals(self):
        self.blocks["outer"].status = DoorStatus.OPEN
        assert self.console.handle("test A1") == "Sealed A1"
        assert self.blocks["outer"].status == DoorStatus.CLOSED

    def test_rescan(self):
        out = self.console.handle("Rescan")
        assert out.startswith("Rescanned.")
        assert "[Discovery Summary]" in out

    def test_rescan_refused_during_cycle(self):
        self.console.handle("enter A1")
        assert self.console.handle("rescan") == "Rescan refused: Busy: a cycle is already running"

    def test_usage(self):
        assert self.console.handle("open the pod bay doors") == USAGE
        assert self.console.handle("enter") == USAGE
        assert self.console.handle("enter A1 now") == USAGE


def test_no_process_tank_message():
    blocks = make_grid()
    del blocks["tank"]
    core = CoreManager(lambda: list(blocks.values()), stream=io.StringIO())
    assert core.console.handle("enter A1") == "No ProcessTank for A1"


def test_summary_with_no_airlocks():
    console = CoreManager(lambda: [], stream=io.StringIO()).console
    out = console.handle("")
    assert out.splitlines() == ["[Discovery Summary]", "", "BaseTanks=0, O2H2=0", "AutoCloseDoors=0"]


def test_serial_bytes_available_without_fileno():
    assert serial_bytes_available(io.StringIO("enter A1\n")) is False


def test_poll_reads_pipe(tmp_path, capsys):
    path = tmp_path / "commands.txt"
    path.write_text("enter A1\n")
    blocks = make_grid()
    with open(path, "r", encoding="utf-8") as stream:
        core = CoreManager(lambda: list(blocks.values()), stream=stream)
        assert core.console.poll() == "Enter A1 started"
        assert core.cycle.active
        assert core.console.poll() is None
        assert core.console.closed, "EOF disables the console"
    assert "Enter A1 started" in capsys.readouterr().out


def test_unexpected_reason_is_echoed():
    class FakeCycle:
        def start_enter(self, airlock_id):
            return False, "WEIRD"

    class FakeCore:
        cycle = FakeCycle()

    console = ConsoleManager(FakeCore(), stream=io.StringIO())
    assert console.handle("enter A1") == "WEIRD"
