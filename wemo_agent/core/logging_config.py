# wemo_agent/core/logging_config.py
import logging
import sys
from datetime import datetime, timezone
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Optional

from wemo_agent.core.config import Settings, settings as default_settings

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s]  %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _resolve_log_dir(log_dir: str) -> Path:
    path = Path(log_dir)
    if not path.is_absolute():
        path = Path.cwd() / path
    path.mkdir(parents=True, exist_ok=True)
    return path


def configure_logging(settings: Optional[Settings] = None) -> logging.Logger:
    """Install console (and optionally rotating file) handlers on the root logger.

    Library modules only call ``logging.getLogger(__name__)``; this is meant to
    be called once by an entry point such as the CLI.
    """
    settings = settings or default_settings
    level = logging.getLevelName(settings.LOG_LEVEL.upper())
    if not isinstance(level, int):
        level = logging.INFO

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)

    handlers: list[logging.Handler] = [console_handler]

    log_file_path = None
    if settings.LOG_TO_FILE:
        log_file_path = _resolve_log_dir(settings.LOG_DIR) / "wemo_agent.log"
        file_handler = TimedRotatingFileHandler(
            log_file_path,
            when="midnight",
            interval=1,
            backupCount=7,
            encoding="utf-8",
            delay=True,  # create file lazily
        )
        file_handler.suffix = "%Y-%m-%d"
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    for handler in handlers:
        root_logger.addHandler(handler)

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)

    if log_file_path is not None:
        root_logger.info(f"Logging initialized. Writing logs to: {log_file_path}")
    root_logger.debug(f"logging start time UTC: {datetime.now(timezone.utc).isoformat()}")

    return logging.getLogger("wemo_agent")
