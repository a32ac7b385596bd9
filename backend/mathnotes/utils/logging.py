# backend/mathnotes/utils/logging.py
import logging
import sys
from logging.handlers import RotatingFileHandler
from ..config import settings

LOG_DIR = settings.LOGS_PATH
LOG_DIR.mkdir(parents=True, exist_ok=True)

console_formatter = logging.Formatter(
    '\033[1;36m%(asctime)s\033[0m - \033[1;33m%(name)s\033[0m - \033[1;35m%(levelname)s\033[0m [\033[1;34m%(module)s:%(lineno)d\033[0m] - %(message)s'
)
file_formatter = logging.Formatter(
    '%(asctime)s - %(name)s - %(levelname)s [%(module)s:%(lineno)d] - %(message)s'
)

# Attribute names LogRecord sets itself; extra keys must not collide with them
RESERVED_ATTRS = set(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


class MathNotesLogger(logging.LoggerAdapter):
    """Per-layer logger. Every record carries the layer name, and colliding extra keys get an extra_ prefix"""

    def __init__(self, layer: str):
        logger = logging.getLogger(f"mathnotes.{layer}")
        logger.setLevel(logging.INFO)
        if not logger.handlers:
            file_handler = RotatingFileHandler(
                LOG_DIR / f"{layer}.log",
                maxBytes=10 * 1024 * 1024,
                backupCount=5,
                delay=True
            )
            file_handler.setFormatter(file_formatter)
            logger.addHandler(file_handler)

            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setFormatter(console_formatter)
            logger.addHandler(console_handler)
        super().__init__(logger, {"layer": layer})

    def process(self, msg, kwargs):
        extra = dict(self.extra)
        for key, value in (kwargs.get("extra") or {}).items():
            extra[f"extra_{key}" if key in RESERVED_ATTRS else key] = value
        kwargs["extra"] = extra
        return msg, kwargs


api_logger = MathNotesLogger("api")
storage_logger = MathNotesLogger("storage")
service_logger = MathNotesLogger("service")
db_logger = MathNotesLogger("database")

__all__ = ["MathNotesLogger", "api_logger", "storage_logger", "service_logger", "db_logger"]
