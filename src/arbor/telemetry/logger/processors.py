# src/arbor/telemetry/logger/processors.py

"""
Custom structlog processors.
"""

import logging

from structlog.typing import EventDict, WrappedLogger

LOG_EMOJIS = {
    "debug": "🐛",
    "info": "ℹ️",
    "warning": "⚠️",
    "error": "❌",
    "critical": "💥",
}
# Keys bound for internal use that should not clutter rendered output.
INTERNAL_KEYS = ("emoji_key",)


def add_emoji_processor(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Prefixes the event with an emoji for its level, or for an explicit ``emoji_key``."""
    key = event_dict.get("emoji_key") or event_dict.get("level", method_name)
    emoji = LOG_EMOJIS.get(str(key).lower())
    if emoji and isinstance(event_dict.get("event"), str):
        event_dict["event"] = f"{emoji} {event_dict['event']}"
    return event_dict


def remove_extra_keys_processor(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    for key in INTERNAL_KEYS:
        event_dict.pop(key, None)
    return event_dict


def level_name(level: int) -> str:
    return logging.getLevelName(level)

# 🔼⚙️
