"""
participant-tracker: support utilities for tracking GitHub participants.

Main features:
- Leveled, colored console logging
- Score badges for participants
- JSON-backed participant cache
- GITHUB_TOKEN management in the .env file
"""

from participant_tracker.badges import get_badge
from participant_tracker.util.cache import load_cache, save_cache
from participant_tracker.util.convert import from_nested_map, to_nested_map
from participant_tracker.util.env import update_env_token
from participant_tracker.util.log import LOG_LEVELS, LogLevel, format_log_message, log

__all__ = [
    "LOG_LEVELS",
    "LogLevel",
    "format_log_message",
    "from_nested_map",
    "get_badge",
    "load_cache",
    "log",
    "save_cache",
    "to_nested_map",
    "update_env_token",
]
