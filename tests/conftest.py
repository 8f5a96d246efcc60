from __future__ import annotations

from io import StringIO

import pytest
from rich.console import Console

from lib_log_message.domain.record import RawLogRecord


class RecordingTarget:
    """Log target returning a fixed prefix and remembering the records it saw."""

    def __init__(self, prefix: str = "foo") -> None:
        self.prefix = prefix
        self.records: list[RawLogRecord] = []

    def compute_prefix(self, record: RawLogRecord) -> str:
        self.records.append(record)
        return self.prefix


@pytest.fixture
def record_console() -> Console:
    return Console(file=StringIO(), record=True, width=200, color_system=None)


@pytest.fixture
def recording_target() -> RecordingTarget:
    return RecordingTarget()
