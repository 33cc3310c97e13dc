# foodconnect/core/logging_config.py

from logging.config import dictConfig

from foodconnect.core.config import settings


def build_logging_config(level: str) -> dict:
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "default",
                "stream": "ext://sys.stdout",
            },
        },
        "loggers": {
            "uvicorn": {"handlers": ["console"], "level": "INFO", "propagate": False},
            "apscheduler": {"handlers": ["console"], "level": "WARNING", "propagate": False},
            # Mail outbox lines must always reach the console
            "foodconnect.services.mail": {"handlers": ["console"], "level": "INFO", "propagate": False},
            "foodconnect": {"handlers": ["console"], "level": level, "propagate": False},
        },
        "root": {"level": level, "handlers": ["console"]},
    }


def setup_logging():
    dictConfig(build_logging_config(settings.LOG_LEVEL.upper()))
