import select
import sys

from utilities.logger import AirlockLogger

from .cycle_manager import CycleError


USAGE = "Args: (none)=summary | list | rescan | test <ID> | enter <ID> | exit <ID>"


def serial_bytes_available(stream):
    """True when ``stream`` has input waiting. Never blocks."""
    try:
        ready, _, _ = select.select([stream], [], [], 0)
    except (OSError, ValueError):
        return False
    return bool(ready)


class ConsoleManager():
    """Text command surface for the airlock controller.

    Each command maps onto one core operation or one read-only report.
    :meth:`handle` returns the text to echo; :meth:`poll` reads any waiting
    line from stdin once per tick and prints the reply.
    """

    def __init__(self, core, stream=None):
        AirlockLogger.info("CONS", "[INIT] ConsoleManager")
        self.core = core
        self.stream = stream if stream is not None else sys.stdin
        self.closed = False

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def handle(self, text):
        """Run one command line and return its reply."""
        arg = (text or "").strip()
        if not arg:
            return self.summary_report()

        keyword = arg.lower()
        if keyword == "rescan":
            ok, reason = self.core.rescan()
            if not ok:
                return f"Rescan refused: {self._describe(reason, None)}"
            return "Rescanned.\n\n" + self.summary_report()
        if keyword == "list":
            return self.details_report()

        parts = arg.split()
        if len(parts) == 2:
            command, airlock_id = parts[0].lower(), parts[1]
            if command == "enter":
                ok, reason = self.core.cycle.start_enter(airlock_id)
                return f"Enter {airlock_id} started" if ok else self._describe(reason, airlock_id)
            if command == "exit":
                ok, reason = self.core.cycle.start_exit(airlock_id)
                return f"Exit {airlock_id} started" if ok else self._describe(reason, airlock_id)
            if command == "test":
                ok, reason = self.core.cycle.seal_only(airlock_id)
                return f"Sealed {airlock_id}" if ok else self._describe(reason, airlock_id)

        return USAGE

    @staticmethod
    def _describe(reason, airlock_id):
        if reason == CycleError.UNKNOWN_AIRLOCK:
            return f"Unknown ID: {airlock_id}"
        if reason == CycleError.BUSY:
            return "Busy: a cycle is already running"
        if reason == CycleError.NO_PROCESS_TANK:
            return f"No ProcessTank for {airlock_id}"
        return str(reason)

    # ------------------------------------------------------------------
    # Reports
    # ------------------------------------------------------------------

    def summary_report(self):
        inv = self.core.inventory
        lines = ["[Discovery Summary]"]
        for rec in inv.airlocks():
            lines.append(
                f" - {rec.id}: "
                f"Inner={len(rec.inner)}, Outer={len(rec.outer)}, Vents={len(rec.vents)}, "
                f"ButtonsInner={len(rec.buttons_inner)}, ButtonsOuter={len(rec.buttons_outer)}, "
                f"SensorsInner={len(rec.sensors_inner)}, SensorsOuter={len(rec.sensors_outer)}, "
                f"Lights={len(rec.lights)}, ProcessTanks={len(rec.process_tanks)}"
            )
        lines.append("")
        lines.append(f"BaseTanks={len(inv.base_tanks)}, O2H2={len(inv.generators)}")
        lines.append(f"AutoCloseDoors={len(inv.auto_close_doors)}")
        return "\n".join(lines)

    def details_report(self):
        inv = self.core.inventory
        lines = ["[Discovery Details]"]
        for rec in inv.airlocks():
            lines.append(f"> {rec.id}")
            lines.append(self._names("  Inner", rec.inner))
            lines.append(self._names("  Outer", rec.outer))
            lines.append(self._names("  Vents", rec.vents))
            lines.append(self._names("  ButtonsInner", rec.buttons_inner))
            lines.append(self._names("  ButtonsOuter", rec.buttons_outer))
            lines.append(self._names("  SensorsInner", rec.sensors_inner))
            lines.append(self._names("  SensorsOuter", rec.sensors_outer))
            lines.append(self._names("  Lights", rec.lights))
            lines.append(self._names("  ProcessTanks", rec.process_tanks))
            lines.append("")
        lines.append(self._names("BaseTanks", inv.base_tanks))
        lines.append(self._names("O2H2", inv.generators))
        return "\n".join(lines)

    @staticmethod
    def _names(label, blocks):
        if not blocks:
            return f"{label} ({len(blocks)}): (none)"
        return f"{label} ({len(blocks)}): " + ", ".join(b.custom_name for b in blocks)

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def poll(self):
        """Handle at most one waiting stdin line. Returns the reply or None."""
        if self.closed or not serial_bytes_available(self.stream):
            return None
        line = self.stream.readline()
        if line == "":
            AirlockLogger.info("CONS", "Input closed, console disabled")
            self.closed = True
            return None
        AirlockLogger.debug("CONS", f"Command: {line.strip()!r}")
        reply = self.handle(line)
        print(reply)
        return reply
