# File: src/utilities/settings.py
"""Controller tuning constants and config.json loading."""

import json
import os

from utilities.logger import AirlockLogger

DEFAULT_CONFIG = {
    "layout_file": "layout.json",  # Simulated grid layout for the entry point
    "log_level": "INFO",
    "log_to_file": False,
    "log_file_path": "airlock_syslog.txt",
    "airlock": {},  # Overrides for AirlockSettings constants
}


def load_config(path="config.json"):
    """Load configuration from ``path`` if it exists, otherwise return defaults."""
    try:
        if os.path.exists(path):
            with open(path, "r", encoding="utf-8") as f:
                config_data = json.load(f)
            if not isinstance(config_data, dict):
                raise ValueError(f"top level must be an object, got {type(config_data).__name__}")
            AirlockLogger.info("CONF", f"Configuration loaded from {path}")
            merged_config = DEFAULT_CONFIG.copy()
            merged_config.update(config_data)
            return merged_config
        AirlockLogger.warning("CONF", f"No {path} found. Using default configuration.")
        return DEFAULT_CONFIG.copy()
    except (OSError, ValueError) as e:
        AirlockLogger.error("CONF", f"Error loading {path}: {e}")
        AirlockLogger.warning("CONF", "Using default configuration.")
        return DEFAULT_CONFIG.copy()


def _coerce(value, default):
    """Convert a config value to the type of its default, or raise ValueError."""
    if isinstance(default, bool):
        if isinstance(value, bool):
            return value
        text = str(value).strip().lower()
        if text in ("true", "1", "yes", "on"):
            return True
        if text in ("false", "0", "no", "off"):
            return False
        raise ValueError(value)
    if isinstance(value, bool):
        raise ValueError(value)
    if isinstance(default, int):
        number = float(value)
        if number != int(number):
            raise ValueError(value)
        return int(number)
    return type(default)(value)


class AirlockSettings:
    """Timing and threshold constants for the cycle controller.

    Every value is a class attribute so the defaults read like the
    constants they are; an instance may override any of them from the
    ``"airlock"`` section of config.json. All times are in ticks unless
    the name says seconds.
    """

    LOCK_MANUAL = False          # Leave airlock doors disabled while idle

    PRESS_OK = 0.90              # Room O2 considered breathable
    VAC_OK = 0.02                # Room O2 considered vacuum
    MIN_O2_DELTA = 0.01          # Rise over baseline needed before accepting pressurize
    MIN_PROC_DELTA = 0.0005      # Tank fill rise per tick counted as capturing
    O2_DROP_EPSILON = 0.001      # Room O2 drop per tick counted as capturing
    STABLE_EPSILON = 0.001       # Dip tolerated while still counting as flat/rising
    CAPTURE_BAND = 0.05          # Band above VAC_OK accepted while still capturing

    WAIT_SHORT = 10              # ~1.6s
    WAIT_PASS = 30               # ~5s to step through a door
    TIMEOUT_TICKS = 300          # ~50s safety cap
    MIN_DEPRESS_TICKS = 30       # >=5s before opening outer
    MIN_PRESS_TICKS = 30         # >=5s before opening inner
    SETTLE_TICKS = 3             # Settle after flipping supply/sink
    STABLE_TICKS = 3             # O2 must be flat/rising this many ticks
    STALL_WARN_INTERVAL = 30     # Ticks between "no capture" warnings

    AUTO_CLOSE_ENABLED = True
    AUTO_CLOSE_DEFAULT_SECONDS = 10
    TICKS_PER_SECOND = 6

    def __init__(self, overrides=None):
        for key, value in (overrides or {}).items():
            name = key.upper()
            if not hasattr(AirlockSettings, name):
                AirlockLogger.warning("CONF", f"Ignoring unknown airlock setting '{key}'")
                continue
            try:
                setattr(self, name, _coerce(value, getattr(AirlockSettings, name)))
            except (TypeError, ValueError, OverflowError):
                AirlockLogger.warning("CONF", f"Ignoring airlock setting '{key}': bad value {value!r}")

    @property
    def auto_close_default_ticks(self):
        return self.AUTO_CLOSE_DEFAULT_SECONDS * self.TICKS_PER_SECOND

    @property
    def tick_period(self):
        """Seconds between scheduler ticks."""
        return 1.0 / self.TICKS_PER_SECOND
