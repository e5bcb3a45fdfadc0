"""
Logging for the airlock controller.

One class-level logger for the whole process. Lines look like::

    [  12.345][NOTE][CORE][CYCL] Done A1 (ENTER)

uptime, level, source and module tag. Console output is coloured; file
output is plain and appended one line at a time.
"""

import time

class LogLevel:
    """Numeric levels, lowest is most verbose."""
    DEBUG = 0
    INFO = 1
    NOTE = 2
    WARNING = 3
    ERROR = 4

    NAMES = {
        "DEBUG": DEBUG,
        "INFO": INFO,
        "NOTE": NOTE,
        "WARNING": WARNING,
        "ERROR": ERROR,
    }

    @classmethod
    def from_name(cls, name, default=INFO):
        """Resolve a level from its config name (case-insensitive)."""
        if name is None:
            return default
        return cls.NAMES.get(str(name).upper(), default)


class AirlockLogger:
    """Process-wide logger. Configure through the class attributes."""

    LEVEL = LogLevel.INFO
    SOURCE = "CORE"
    PRINT_TO_CONSOLE = True
    WRITE_TO_FILE = False
    LOG_FILE_PATH = "airlock_syslog.txt"

    # level -> (tag, ANSI colour)
    STYLES = {
        LogLevel.DEBUG: ("DBUG", "\033[90m"),
        LogLevel.INFO: ("INFO", "\033[94m"),
        LogLevel.NOTE: ("NOTE", "\033[96m"),
        LogLevel.WARNING: ("WARN", "\033[93m"),
        LogLevel.ERROR: ("!ERR", "\033[91m"),
    }
    RESET = "\033[0m"

    @classmethod
    def set_level(cls, level):
        cls.LEVEL = level

    @classmethod
    def enable_file_logging(cls, enable=True, path=None):
        cls.WRITE_TO_FILE = enable
        if path:
            cls.LOG_FILE_PATH = path

    @classmethod
    def format_line(cls, level, module_tag, message, source_tag=None):
        tag = cls.STYLES[level][0]
        source = source_tag or cls.SOURCE
        return f"[{time.monotonic():>8.3f}][{tag:<4}][{source:<4}][{module_tag:<4}] {message}"

    @classmethod
    def _log(cls, level, module_tag, message, source_tag=None, file_override=None):
        if level < cls.LEVEL:
            return

        line = cls.format_line(level, module_tag, message, source_tag)

        if cls.PRINT_TO_CONSOLE:
            print(f"{cls.STYLES[level][1]}{line}{cls.RESET}")

        target = file_override or (cls.LOG_FILE_PATH if cls.WRITE_TO_FILE else None)
        if target:
            cls._append(target, line)

    @classmethod
    def _append(cls, path, line):
        try:
            with open(path, "a", encoding="utf-8") as f:
                f.write(line + "\n")
        except OSError as e:
            # Logging must never take the controller down
            if cls.PRINT_TO_CONSOLE:
                print(f"{cls.STYLES[LogLevel.ERROR][1]}Logger OS Error: {e}{cls.RESET}")

    @classmethod
    def debug(cls, tag, msg, src=None, file=None):
        cls._log(LogLevel.DEBUG, tag, msg, source_tag=src, file_override=file)

    @classmethod
    def info(cls, tag, msg, src=None, file=None):
        cls._log(LogLevel.INFO, tag, msg, source_tag=src, file_override=file)

    @classmethod
    def note(cls, tag, msg, src=None, file=None):
        cls._log(LogLevel.NOTE, tag, msg, source_tag=src, file_override=file)

    @classmethod
    def warning(cls, tag, msg, src=None, file=None):
        cls._log(LogLevel.WARNING, tag, msg, source_tag=src, file_override=file)

    @classmethod
    def error(cls, tag, msg, src=None, file=None):
        cls._log(LogLevel.ERROR, tag, msg, source_tag=src, file_override=file)
