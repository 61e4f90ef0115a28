import logging
import logging.config
import os
from datetime import datetime
from gelato_ops.core.config import settings

LOG_FILE_MAX_BYTES = 10 * 1024 * 1024
LOG_FILE_BACKUPS = 10

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

FORMATTERS = {
    "default": {
        "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        "datefmt": DATE_FORMAT,
    },
    "detailed": {
        "format": "%(asctime)s - %(name)s - %(levelname)s - %(module)s - %(funcName)s:%(lineno)d - %(message)s",
        "datefmt": DATE_FORMAT,
    },
    "access": {
        "format": "%(asctime)s - %(message)s",
        "datefmt": DATE_FORMAT,
    },
}


def _file_handler(kind: str, level: str, formatter: str) -> dict:
    """Daily-named rotating file under <LOG_DIR>/<kind>/"""
    directory = os.path.join(settings.LOG_DIR, kind)
    os.makedirs(directory, exist_ok=True)
    stamp = datetime.now().strftime("%Y-%m-%d")
    return {
        "class": "logging.handlers.RotatingFileHandler",
        "level": level,
        "formatter": formatter,
        "filename": os.path.join(directory, f"{kind}-{stamp}.log"),
        "maxBytes": LOG_FILE_MAX_BYTES,
        "backupCount": LOG_FILE_BACKUPS,
    }


def build_logging_config() -> dict:
    handlers = {
        "console": {
            "class": "logging.StreamHandler",
            "level": settings.LOG_LEVEL,
            "formatter": "default",
            "stream": "ext://sys.stdout",
        },
    }
    app_handlers = ["console"]
    access_handlers = ["console"]

    if settings.LOG_TO_FILE:
        handlers["app_file"] = _file_handler("app", settings.LOG_LEVEL, "detailed")
        handlers["error_file"] = _file_handler("error", "ERROR", "detailed")
        handlers["access_file"] = _file_handler("access", "INFO", "access")
        app_handlers = ["console", "app_file", "error_file"]
        access_handlers = ["access_file"]

    def logger_entry(level: str, targets: list) -> dict:
        return {"level": level, "handlers": targets, "propagate": False}

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": FORMATTERS,
        "handlers": handlers,
        "loggers": {
            "": logger_entry(settings.LOG_LEVEL, app_handlers),
            # request lines from LoggingMiddleware and uvicorn share one sink
            "access": logger_entry("INFO", access_handlers),
            "uvicorn.access": logger_entry("INFO", access_handlers),
            "sqlalchemy.engine": logger_entry("WARNING", app_handlers),
        },
    }


def setup_logging():
    """Setup application logging configuration"""
    logging.config.dictConfig(build_logging_config())

    logger = logging.getLogger(__name__)
    logger.info("🍨 Gelato Ops - Logging configured")
    logger.info(f"📝 Log level: {settings.LOG_LEVEL}")
    if settings.LOG_TO_FILE:
        logger.info(f"🗂️  Logs directory: {settings.LOG_DIR}/")
