# File: src/core/code.py
"""
PROJECT: Airlock cycle controller - process entry point.

Loads config.json, builds the simulated grid from its layout file and runs
the controller tick loop with console commands read from stdin.
"""

import asyncio
import sys
import traceback

from utilities.logger import AirlockLogger, LogLevel
from utilities.settings import load_config

# Init logger at DEBUG until config says otherwise
AirlockLogger.set_level(LogLevel.DEBUG)
AirlockLogger.enable_file_logging(False)


def configure_logging(config):
    AirlockLogger.set_level(LogLevel.from_name(config.get("log_level"), LogLevel.INFO))
    AirlockLogger.enable_file_logging(
        bool(config.get("log_to_file", False)),
        config.get("log_file_path"),
    )


async def run(config, max_ticks=None):
    """Build the grid and core, then run the tick loop."""
    from core.core_manager import CoreManager
    from sim.grid import SimGrid

    layout_file = config.get("layout_file")
    grid = SimGrid.load(layout_file)

    app = CoreManager(grid.blocks, config=config)
    # Physics first so the controller sees this tick's state
    app.ticker.add_task(grid.step)
    AirlockLogger.info("CODE", f"Starting tick loop at {app.settings.TICKS_PER_SECOND}/s")
    await app.run(max_ticks=max_ticks)
    return app


def main(argv=None):
    """Console script entry point: ``airlock-controller [config.json]``."""
    if argv is None:
        argv = sys.argv[1:]
    config_path = argv[0] if argv else "config.json"

    AirlockLogger.info("CODE", "*** BOOTING AIRLOCK CONTROLLER ***")
    config = load_config(config_path)
    configure_logging(config)

    try:
        asyncio.run(run(config))
    except KeyboardInterrupt:
        AirlockLogger.info("CODE", "Interrupted, shutting down")
    except (OSError, ValueError) as e:
        AirlockLogger.error("CODE", f"Controller stopped: {e}")
        traceback.print_exception(type(e), e, e.__traceback__)
        return 1
    return 0


# Main Execution
if __name__ == "__main__":
    sys.exit(main())
