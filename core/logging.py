"""
로깅 설정

`python -m web`과 scripts/backup.py 진입점에서 한 번 호출.
콘솔과 logs/<process>.log (자정마다 롤링) 양쪽에 같은 형식으로 기록.
"""

import logging
import sys
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

from core.constants import Defaults, Paths

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_FILE_BACKUP_COUNT = 7

# WARNING 미만은 버리는 로거
NOISY_LOGGERS = ("httpcore", "httpx", "uvicorn.access")


def setup_logging(
    process_name: str,
    level: str = Defaults.LOG_LEVEL,
    log_dir: Path | None = None,
) -> logging.Logger:
    """루트 로거에 콘솔/파일 핸들러 설정

    Args:
        process_name: 로그 파일 이름 ("web", "backup")
        level: 로그 레벨 이름
        log_dir: 로그 디렉토리 (None이면 Paths.LOGS_DIR)

    Returns:
        루트 Logger
    """
    log_dir = log_dir or Paths.LOGS_DIR
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / f"{process_name}.log"

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    file_handler = TimedRotatingFileHandler(
        filename=log_file,
        when="midnight",
        backupCount=LOG_FILE_BACKUP_COUNT,
        encoding="utf-8",
    )
    file_handler.suffix = "%Y-%m-%d"  # web.log.2026-02-21

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
    for handler in (logging.StreamHandler(sys.stdout), file_handler):
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    for logger_name in NOISY_LOGGERS:
        logging.getLogger(logger_name).setLevel(logging.WARNING)

    root_logger.info(f"로깅 초기화: {process_name} → {log_file} ({level})")
    return root_logger
