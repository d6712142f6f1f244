"""Logging setup for the note-sync command line.

Records go to stderr and can be teed to a file.
"""

import json
import logging
import os
import sys

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
TEXT_FORMAT = "[%(asctime)s] [%(levelname)s] %(message)s"
FILE_FORMAT = "[%(asctime)s] [%(levelname)s] %(name)s %(message)s"

# Loggers that are chatty below WARNING
_NOISY_LOGGERS = ("charset_normalizer",)


class JsonFormatter(logging.Formatter):
    """Render each record as one JSON object per line.

    Keys: ts, level, logger, msg, plus exc when the record carries a
    traceback.
    """

    def __init__(self, datefmt: str | None = DATE_FORMAT) -> None:
        super().__init__(datefmt=datefmt)

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "ts": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str, ensure_ascii=False)


def _make_formatter(debug_format: str, fmt: str = TEXT_FORMAT) -> logging.Formatter:
    if debug_format == "json":
        return JsonFormatter()
    return logging.Formatter(fmt, datefmt=DATE_FORMAT)


def _resolve_level(debug: bool, level: str | None) -> int:
    """debug flag, then LOG_LEVEL, then the configured level, then INFO."""
    if debug:
        return logging.DEBUG
    name = os.getenv("LOG_LEVEL", level or "INFO").strip().upper()
    return getattr(logging, name, logging.INFO)


def setup_logging(
    debug: bool = False,
    log_file: str | None = None,
    debug_format: str = "text",
    level: str | None = None,
) -> None:
    """Configure the root logger once per process.

    Args:
        debug: Force DEBUG regardless of any configured level.
        log_file: Optional file that receives a copy of every record.
        debug_format: ``"text"`` or ``"json"``.
        level: Level name from the config file, used when ``LOG_LEVEL`` is
            unset.

    Environment variables:
        LOG_LEVEL: Level name (DEBUG, INFO, WARNING, ERROR).
    """
    log_level = _resolve_level(debug, level)

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(_make_formatter(debug_format))
    handlers: list[logging.Handler] = [console]
    if log_file:
        tee = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        tee.setFormatter(_make_formatter(debug_format, FILE_FORMAT))
        handlers.append(tee)
    logging.basicConfig(level=log_level, handlers=handlers)

    if log_level != logging.DEBUG:
        for name in _NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)
