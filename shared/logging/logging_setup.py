from datetime import datetime
from pytz import timezone
import logging.config
import logging
import os

APP_LOGGER_NAME = "quip_mcp"
DEFAULT_TIMEZONE = "Europe/Berlin"
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"

_LEVELS: dict[str, int] = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}

_ANSI_RESET = "\033[0m"
_LEVEL_COLORS: dict[int, str] = {
    logging.DEBUG: "\033[36m",     # cyan
    logging.WARNING: "\033[33m",   # yellow
    logging.ERROR: "\033[31m",     # red
    logging.CRITICAL: "\033[35m",  # magenta
}


def get_log_level() -> int:
    """Resolve LOG_LEVEL (debug, info, warning, error, critical). Unknown names mean info."""
    return _LEVELS.get(os.getenv("LOG_LEVEL", "info").strip().lower(), logging.INFO)


class CustomFormatter(logging.Formatter):
    def __init__(self, tz_name, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.tz = timezone(tz_name)

    def formatTime(self, record, datefmt=None):
        dt = datetime.fromtimestamp(record.created, self.tz)
        return dt.strftime(datefmt) if datefmt else dt.isoformat()

    def format(self, record):
        try:
            message = record.getMessage()
        except (TypeError, ValueError):
            # broken format arguments: log the raw message instead of failing the handler
            message = str(record.msg)

        if record.levelno >= logging.ERROR:
            message = "⛔ " + message
        elif record.levelno == logging.WARNING:
            message = "⚠️ " + message

        # format a copy: the same record is passed on to every handler
        record = logging.makeLogRecord(record.__dict__)
        record.msg = message
        record.args = ()
        return super().format(record)


class ColoredFormatter(CustomFormatter):
    """Console formatter that colors the whole line by level.

    INFO stays uncolored. Colors are skipped when NO_COLOR is set.
    """

    def format(self, record) -> str:
        line = super().format(record)
        if os.getenv("NO_COLOR"):
            return line
        ansi = _LEVEL_COLORS.get(record.levelno, "")
        return f"{ansi}{line}{_ANSI_RESET}" if ansi else line


def setup_logging() -> logging.Logger:
    """Configure root logging and return the application logger.

    The console handler writes to stderr: stdout carries the MCP stdio protocol.
    A file handler (<LOG_DIR>/app.log, plain text) is added only when LOG_DIR is set.
    """
    loglevel = get_log_level()
    tz_name = os.getenv("TIMEZONE", DEFAULT_TIMEZONE)
    log_dir = os.getenv("LOG_DIR")

    handlers: dict = {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "colored",
            "level": loglevel,
            "stream": "ext://sys.stderr",
        },
    }
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        handlers["file"] = {
            "class": "logging.FileHandler",
            "formatter": "standard",
            "level": loglevel,
            "filename": os.path.join(log_dir, "app.log"),
            "encoding": "utf-8",
        }

    logging_config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {
                "()": CustomFormatter,
                "format": LOG_FORMAT,
                "datefmt": LOG_DATEFMT,
                "tz_name": tz_name,
            },
            "colored": {
                "()": ColoredFormatter,
                "format": LOG_FORMAT,
                "datefmt": LOG_DATEFMT,
                "tz_name": tz_name,
            },
        },
        "handlers": handlers,
        "root": {
            "handlers": list(handlers.keys()),
            "level": loglevel,
        },
    }

    logging.config.dictConfig(logging_config)

    # request lines from httpx and the MCP session chatter only in debug mode
    quiet_level = logging.DEBUG if loglevel == logging.DEBUG else logging.WARNING
    for name in ("httpx", "httpcore", "mcp.server.lowlevel.server"):
        logging.getLogger(name).setLevel(quiet_level)

    return logging.getLogger(APP_LOGGER_NAME)
