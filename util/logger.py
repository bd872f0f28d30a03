# util/logger.py
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from config.settings import settings

logging.captureWarnings(True)

TEXT_FMT = "%(asctime)s %(levelname)s %(name)s - %(message)s"
DATE_FMT = "%Y-%m-%dT%H:%M:%S%z"


class ColoredFormatter(logging.Formatter):
    COLORS = {
        "DEBUG": "\033[37m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[41m",
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        # Work on a copy so file handlers keep the plain levelname
        record = logging.makeLogRecord(record.__dict__)
        lvl = record.levelname
        record.levelname = f"{self.COLORS.get(lvl, self.RESET)}{lvl}{self.RESET}"
        return super().format(record)


def _level() -> int:
    return getattr(logging, (settings.LOG_LEVEL or "INFO").upper(), logging.INFO)


def init_logger() -> logging.Logger:
    """
    Idempotent logger init:
    - Console handler on stdout with colored level names.
    - Size-rotated file handler under LOG_DIR when LOG_TO_FILE is set.
    - Level from settings.LOG_LEVEL.
    """
    root = logging.getLogger()
    if getattr(root, "_cdn_inited", False):
        return logging.getLogger(settings.LOGGER_NAME)

    level = _level()
    root.setLevel(level)

    for h in list(root.handlers):
        root.removeHandler(h)

    ch = logging.StreamHandler(sys.stdout)
    ch.setLevel(level)
    ch.setFormatter(ColoredFormatter(TEXT_FMT, datefmt=DATE_FMT))
    root.addHandler(ch)

    if settings.LOG_TO_FILE:
        os.makedirs(settings.LOG_DIR, exist_ok=True)
        fh = RotatingFileHandler(
            os.path.join(settings.LOG_DIR, settings.LOG_FILE_NAME),
            maxBytes=settings.LOG_MAX_BYTES,
            backupCount=settings.LOG_BACKUP_COUNT,
            encoding="utf-8",
        )
        fh.setLevel(level)
        fh.setFormatter(logging.Formatter(TEXT_FMT, datefmt=DATE_FMT))
        root.addHandler(fh)

    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.error").setLevel(logging.INFO)
    logging.getLogger("uvicorn.access").setLevel(logging.INFO)

    root._cdn_inited = True  # type: ignore[attr-defined]
    logger = logging.getLogger(settings.LOGGER_NAME)
    logger.debug("logger.init level=%s file=%s", level, settings.LOG_TO_FILE)
    return logger
