"""
Logging configuration for the ktool CLI.

Everything is written to stderr so stdout only carries command results.
"""

import logging
import logging.config
from typing import Any, Dict, Optional


class BundleContextFilter(logging.Filter):
    """Attach the name of the bundle being collected to every record."""

    bundle_name: Optional[str] = None

    def filter(self, record: logging.LogRecord) -> bool:
        record.bundle = self.bundle_name or "-"
        return True


class ConsoleFormatter(logging.Formatter):
    """Plain messages for progress, prefixed with the level for anything louder."""

    PREFIXES = {
        logging.WARNING: "Warning: ",
        logging.ERROR: "ERROR: ",
        logging.CRITICAL: "ERROR: ",
    }

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        return self.PREFIXES.get(record.levelno, "") + message


def set_bundle_name(name: Optional[str]) -> None:
    """Set (or clear) the bundle name reported by BundleContextFilter."""
    BundleContextFilter.bundle_name = name


def get_logging_config(level: str = "INFO") -> Dict[str, Any]:
    """Get logging configuration for the given level."""
    level = level.upper()
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {
            "bundle_context": {
                "()": BundleContextFilter
            }
        },
        "formatters": {
            "default": {
                "()": ConsoleFormatter,
                "fmt": "%(message)s"
            },
            "debug": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - [%(bundle)s] %(message)s"
            }
        },
        "handlers": {
            "default": {
                "class": "logging.StreamHandler",
                "formatter": "debug" if level == "DEBUG" else "default",
                "stream": "ext://sys.stderr",
                "filters": ["bundle_context"]
            }
        },
        "loggers": {
            "ktool": {
                "handlers": ["default"],
                "level": level,
                "propagate": False
            },
            "urllib3": {
                "level": "WARNING"
            }
        },
        "root": {
            "level": "WARNING",
            "handlers": ["default"]
        }
    }


def configure_logging(level: str = "INFO") -> None:
    """Apply the ktool logging configuration."""
    logging.config.dictConfig(get_logging_config(level))
