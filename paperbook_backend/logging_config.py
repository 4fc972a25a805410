import logging
import os
import sys


class ColoredFormatter(logging.Formatter):
    """Custom formatter that adds colors to log output."""

    # ANSI color codes
    grey = "\x1b[38;21m"
    green = "\x1b[32m"
    yellow = "\x1b[33m"
    red = "\x1b[31m"
    bold_red = "\x1b[31;1m"
    orange = "\x1b[38;5;208m"
    reset = "\x1b[0m"

    COLORS = {
        logging.DEBUG: grey,
        logging.INFO: green,
        logging.WARNING: yellow,
        logging.ERROR: red,
        logging.CRITICAL: bold_red
    }

    def __init__(self, fmt=None, datefmt=None, colorize=None):
        super().__init__(fmt=fmt, datefmt=datefmt)
        self.colorize = sys.stdout.isatty() if colorize is None else colorize

    def format(self, record):
        formatted = super().format(record)

        if not self.colorize:
            return formatted

        # Format is: "timestamp - LEVEL - name - message"
        parts = formatted.split(' - ', 2)
        if len(parts) < 3:
            return formatted

        log_color = self.COLORS.get(record.levelno, self.grey)
        timestamp, level, rest = parts
        return f"{self.orange}{timestamp}{self.reset} - {log_color}{level}{self.reset} - {rest}"


LOG_FORMAT = '%(asctime)s - %(levelname)-8s - %(name)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

VALID_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def resolve_level(name: str, default: str = "WARNING") -> str:
    level = (name or default).upper()
    return level if level in VALID_LEVELS else default


def setup_logging(level: str = None) -> logging.Handler:
    """
    Route all logging through one colored stdout handler.

    The paperbook_backend loggers use LOG_LEVEL (default WARNING); uvicorn
    access logs stay at INFO so requests remain visible.
    """
    root = logging.getLogger()
    for handler in root.handlers[:]:
        root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(ColoredFormatter(LOG_FORMAT, datefmt=DATE_FORMAT))

    root.addHandler(handler)
    root.setLevel(logging.WARNING)

    for name in ("uvicorn.access", "uvicorn.error"):
        uvicorn_logger = logging.getLogger(name)
        uvicorn_logger.handlers = []
        uvicorn_logger.addHandler(handler)
        uvicorn_logger.setLevel(logging.INFO)

    backend_level = resolve_level(level or os.environ.get("LOG_LEVEL", "WARNING"))
    logging.getLogger("paperbook_backend").setLevel(getattr(logging, backend_level))

    return handler


def uvicorn_log_config(level: str) -> dict:
    """Uvicorn dictConfig using the same formatter."""
    level = resolve_level(level, "INFO")
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "colored": {
                "()": ColoredFormatter,
                "fmt": "%(asctime)s - %(levelname)-8s - %(message)s",
                "datefmt": DATE_FORMAT
            },
        },
        "handlers": {
            "default": {
                "class": "logging.StreamHandler",
                "formatter": "colored",
                "stream": "ext://sys.stdout"
            },
        },
        "loggers": {
            "uvicorn": {"handlers": ["default"], "level": level, "propagate": False},
            "uvicorn.error": {"handlers": ["default"], "level": level, "propagate": False},
            "uvicorn.access": {
                "handlers": ["default"],
                "level": "INFO" if level != "ERROR" else "WARNING",
                "propagate": False
            },
        }
    }
