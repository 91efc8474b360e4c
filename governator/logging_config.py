"""
Custom logging configuration that keeps credentials out of the logs
"""

import logging
import logging.config
import re
from typing import Any, Dict

USERINFO_PATTERN = re.compile(r"(?P<scheme>[a-zA-Z][a-zA-Z0-9+.-]*://)[^/@\s]+@")

LIBRARY_LOGGERS = ("httpx", "httpcore", "docker", "urllib3")


class RedactCredentialsFilter(logging.Filter):
    """Filter that masks user:password pairs embedded in URLs."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        redacted = USERINFO_PATTERN.sub(r"\g<scheme>***@", message)
        if redacted != message:
            record.msg = redacted
            record.args = ()
        return True  # Never drop a record, only rewrite it


def get_logging_config(level: str = "INFO") -> Dict[str, Any]:
    """Get logging configuration with credential redaction."""
    level = level.upper()
    library_level = "DEBUG" if level == "DEBUG" else "WARNING"

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {
            "redact_credentials": {
                "()": RedactCredentialsFilter
            }
        },
        "formatters": {
            "default": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            }
        },
        "handlers": {
            "default": {
                "class": "logging.StreamHandler",
                "formatter": "default",
                "stream": "ext://sys.stdout",
                "filters": ["redact_credentials"]
            }
        },
        "loggers": {
            "governator": {
                "handlers": ["default"],
                "level": level,
                "propagate": False
            },
            **{
                name: {
                    "handlers": ["default"],
                    "level": library_level,
                    "propagate": False
                }
                for name in LIBRARY_LOGGERS
            }
        },
        "root": {
            "level": level,
            "handlers": ["default"]
        }
    }


def configure_logging(level: str = "INFO") -> None:
    """Apply the logging configuration."""
    logging.config.dictConfig(get_logging_config(level))
