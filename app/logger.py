"""Logging setup for the recipe generator.

Text output is colored with an emoji per level; set LOG_TYPE=json for
one JSON object per line (log shippers). LOG_LEVEL picks the threshold.
"""

import json
import logging
import sys
from typing import Any

from app.config import get_settings


class JSONFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        # Set via `extra=` on provider calls
        for field in ("provider", "status_code"):
            if hasattr(record, field):
                log_data[field] = getattr(record, field)

        return json.dumps(log_data)


class EmojiTextFormatter(logging.Formatter):
    """Colored single-line text, matching the console style of the service."""

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[31m",
    }
    RESET = "\033[0m"

    ICONS = {
        "DEBUG": "🔍",
        "INFO": "🍳",
        "WARNING": "⚠️",
        "ERROR": "❌",
        "CRITICAL": "🔥",
    }

    def format(self, record: logging.LogRecord) -> str:
        level = record.levelname
        color = self.COLORS.get(level, self.RESET)
        icon = self.ICONS.get(level, "")
        timestamp = self.formatTime(record, "%Y-%m-%d %H:%M:%S")

        message = f"{color}{icon} {timestamp} {level:<8} {record.name:<28} {record.getMessage()}{self.RESET}"

        if record.exc_info:
            message += f"\n{self.formatException(record.exc_info)}"

        return message


def get_logger(name: str) -> logging.Logger:
    """
    Return a logger under the `recipe_generator` hierarchy.

    The stdout handler lives on the root `recipe_generator` logger and is
    attached once, so module loggers only propagate to it.
    """
    root = logging.getLogger("recipe_generator")

    if not root.handlers:
        settings = get_settings()
        level = getattr(logging, settings.log_level.upper(), logging.INFO)
        root.setLevel(level)

        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(level)
        if settings.log_type.lower() == "json":
            handler.setFormatter(JSONFormatter())
        else:
            handler.setFormatter(EmojiTextFormatter())
        root.addHandler(handler)

    if name == "recipe_generator":
        return root
    return root.getChild(name)


logger = get_logger("recipe_generator")

# httpx logs every request URL at INFO, which would include a Gemini `key` parameter
logging.getLogger("httpx").setLevel(logging.WARNING)
