# tests/conftest.py
import os
import sys

import pytest

src_path = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'src'))
if src_path not in sys.path:
    sys.path.append(src_path)

from utilities.logger import AirlockLogger


@pytest.fixture(autouse=True)
def reset_logger():
    """Keep logger configuration from leaking between tests."""
    level = AirlockLogger.LEVEL
    write_to_file = AirlockLogger.WRITE_TO_FILE
    path = AirlockLogger.LOG_FILE_PATH
    yield
    AirlockLogger.LEVEL = level
    AirlockLogger.WRITE_TO_FILE = write_to_file
    AirlockLogger.LOG_FILE_PATH = path


@pytest.fixture
def captured_logs(monkeypatch):
    """Record every emitted log line as (level, tag, message)."""
    records = []

    def fake_log(level, module_tag, message, source_tag=None, file_override=None):
        records.append((level, module_tag, message))

    monkeypatch.setattr(AirlockLogger, "_log", staticmethod(fake_log))
    return records

