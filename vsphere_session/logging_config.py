"""
Logging configuration with credential redaction
"""

import logging
import logging.config
import re
from typing import Any, Dict

# [scheme://]user:password@ -> [scheme://]user:****@, password up to the last @
_URL_PASSWORD = re.compile(r"(?P<prefix>(?:[a-zA-Z][a-zA-Z0-9+.-]*://)?[^/@:\s]+):[^/\s]*@")


def redact_credentials(text: str) -> str:
    """Mask passwords embedded in URLs."""
    return _URL_PASSWORD.sub(r"\g<prefix>:****@", text)


class CredentialFilter(logging.Filter):
    """Filter that masks URL passwords in log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        redacted = redact_credentials(message)
        if redacted != message:
            record.msg = redacted
            record.args = None
        return True


def get_logging_config(level: str = "INFO") -> Dict[str, Any]:
    """Get logging configuration with credential redaction."""
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {
            "credential_filter": {
                "()": CredentialFilter
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
                "filters": ["credential_filter"]
            }
        },
        "loggers": {
            "vsphere_session": {
                "handlers": ["default"],
                "level": level,
                "propagate": False
            },
            "pyVmomi": {
                "handlers": ["default"],
                "level": "WARNING",
                "propagate": False
            }
        },
        "root": {
            "level": "WARNING",
            "handlers": ["default"]
        }
    }


def configure_logging(level: str = "INFO") -> None:
    """Apply the package logging configuration."""
    logging.config.dictConfig(get_logging_config(level.upper()))
