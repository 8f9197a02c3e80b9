import logging
import textwrap

import pytest


@pytest.fixture
def write_settings(tmp_path):
    def _write(content: str = "", app_root=None):
        root = app_root or tmp_path
        path = root / "tmp" / "maintenance.yml"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(content), encoding="utf-8")
        return path

    return _write


class EventCollector(logging.Handler):
    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.events: list[dict] = []

    def emit(self, record: logging.LogRecord) -> None:
        if isinstance(record.msg, dict):
            self.events.append(record.msg)


@pytest.fixture
def log_events():
    # setup_logging() replaces the root handlers, so collect on the package logger instead of caplog.
    collector = EventCollector()
    package_logger = logging.getLogger("turnout")
    package_logger.addHandler(collector)
    try:
        yield collector.events
    finally:
        package_logger.removeHandler(collector)
