"""
accounts-api/logging_config.py
Configuration du logging
"""

import logging
import sys
from pathlib import Path
from typing import List, Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Loggers qui ne propagent pas vers le root et reçoivent nos handlers
SERVICE_LOGGERS = ["uvicorn", "uvicorn.access", "uvicorn.error", "accounts"]


class ColoredFormatter(logging.Formatter):
    """Formatter avec couleurs pour le terminal"""

    COLORS = {
        'DEBUG': '\033[0;36m',    # Cyan
        'INFO': '\033[0;32m',     # Vert
        'WARNING': '\033[0;33m',  # Jaune
        'ERROR': '\033[0;31m',    # Rouge
        'CRITICAL': '\033[1;31m', # Rouge gras
    }
    RESET = '\033[0m'

    def format(self, record):
        color = self.COLORS.get(record.levelname)
        if color is None:
            return super().format(record)
        # Copie pour ne pas colorer les autres handlers (fichier)
        record = logging.makeLogRecord(record.__dict__)
        record.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(record)


def _configure(log_level: str, console_formatter: logging.Formatter, log_file: Optional[str]) -> logging.Logger:
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)
    plain_formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(console_formatter)
    handlers: List[logging.Handler] = [console_handler]

    # Handler fichier (optionnel, jamais coloré)
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(plain_formatter)
        handlers.append(file_handler)

    for handler in handlers:
        handler.setLevel(numeric_level)

    logging.basicConfig(level=numeric_level, handlers=handlers, force=True)

    for logger_name in SERVICE_LOGGERS:
        log = logging.getLogger(logger_name)
        log.setLevel(numeric_level)
        log.handlers = list(handlers)
        log.propagate = False

    logging.getLogger("watchfiles").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    return logging.getLogger("accounts")


def setup_logging(log_level: str = "INFO", log_file: Optional[str] = None) -> logging.Logger:
    """Configure le logging standard"""
    logger = _configure(log_level, logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT), log_file)
    logger.info("✅ Logging configured")
    return logger


def setup_colored_logging(log_level: str = "INFO", log_file: Optional[str] = None) -> logging.Logger:
    """Configure le logging avec couleurs dans le terminal"""
    logger = _configure(log_level, ColoredFormatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT), log_file)
    logger.info("✅ Colored logging configured")
    return logger


def get_uvicorn_log_config(log_level: str = "INFO") -> dict:
    """Configuration de logging pour Uvicorn"""
    level = log_level.upper()
    uvicorn_loggers = {
        name: {"handlers": ["default"], "level": level, "propagate": False}
        for name in ("uvicorn", "uvicorn.error", "uvicorn.access")
    }
    uvicorn_loggers["watchfiles"] = {"handlers": ["default"], "level": "WARNING", "propagate": False}

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {"format": LOG_FORMAT, "datefmt": LOG_DATE_FORMAT},
        },
        "handlers": {
            "default": {
                "formatter": "default",
                "class": "logging.StreamHandler",
                "stream": "ext://sys.stdout",
            },
        },
        "loggers": uvicorn_loggers,
    }
