"""
core/logging.py 테스트
"""

import logging
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

import pytest

from core.logging import NOISY_LOGGERS, setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in root.handlers:
        handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.mark.usefixtures("restore_root_logger")
class TestSetupLogging:
    """콘솔/파일 핸들러 설정"""

    def test_writes_process_log_file(self, temp_dir: Path) -> None:
        log_dir = temp_dir / "logs"

        root = setup_logging("backup", log_dir=log_dir)
        logging.getLogger("core.ledger.store").info("hello")
        for handler in root.handlers:
            handler.flush()

        log_file = log_dir / "backup.log"
        assert log_file.exists()
        assert "hello" in log_file.read_text(encoding="utf-8")

    def test_handlers_replaced_not_stacked(self, temp_dir: Path) -> None:
        setup_logging("web", log_dir=temp_dir)
        root = setup_logging("web", log_dir=temp_dir)

        assert len(root.handlers) == 2
        assert sum(isinstance(h, TimedRotatingFileHandler) for h in root.handlers) == 1

    def test_level_and_noisy_loggers(self, temp_dir: Path) -> None:
        root = setup_logging("web", level="DEBUG", log_dir=temp_dir)

        assert root.level == logging.DEBUG
        for name in NOISY_LOGGERS:
            assert logging.getLogger(name).level == logging.WARNING
