"""
Leveled console logging with colored level tags.

Messages are rendered as ``[timestamp] <emoji>[LEVEL] message`` and written to
standard output through a rich console. Filtering uses a threshold that is
captured once, when the logger's configuration is built.
"""

import os
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import datetime
from enum import IntEnum
from zoneinfo import ZoneInfo

from rich.color import ColorSystem
from rich.console import Console
from rich.style import Style

LOG_LEVEL_ENV = "LOG_LEVEL"
DEFAULT_TIMEZONE = "Asia/Seoul"


class LogLevel(IntEnum):
    """Log levels, ordered by rank."""

    LOG = 0
    DEBUG = 1
    INFO = 2
    WARN = 3
    ERROR = 4

    @classmethod
    def parse(cls, name: "str | LogLevel | None", default: "LogLevel" = None) -> "LogLevel":
        """
        Normalize a level name (case-insensitive) to a LogLevel.

        Unrecognized names return ``default``, which itself defaults to LOG.
        """
        if isinstance(name, LogLevel):
            return name
        if default is None:
            default = cls.LOG
        if not name:
            return default
        return cls.__members__.get(str(name).strip().upper(), default)


LOG_LEVELS: dict[str, int] = {level.name: level.value for level in LogLevel}


@dataclass(frozen=True)
class LevelStyle:
    """Console style of one level tag."""

    prefix: str
    fg: str
    bg: str | None = None

    @property
    def style(self) -> Style:
        return Style(color=self.fg, bgcolor=self.bg)


LOG_STYLES: dict[LogLevel, LevelStyle] = {
    LogLevel.ERROR: LevelStyle(prefix="🚨 ", fg="white", bg="red"),
    LogLevel.WARN: LevelStyle(prefix="⚠️ ", fg="black", bg="yellow"),
    LogLevel.INFO: LevelStyle(prefix="ℹ️ ", fg="green"),
    LogLevel.DEBUG: LevelStyle(prefix="🔍 ", fg="cyan"),
    LogLevel.LOG: LevelStyle(prefix="📝 ", fg="white"),
}


def format_log_message(
    level: "str | LogLevel",
    message: str,
    timestamp: str,
    *,
    color_system: ColorSystem | None = ColorSystem.STANDARD,
) -> str:
    """
    Format a log line with a colored level tag.

    ERROR and WARN tags get a background and a foreground color, the other
    levels only a foreground color. Unknown level names use the LOG style.

    Args:
        level: Level name (case-insensitive) or LogLevel
        message: Message text, included verbatim
        timestamp: Pre-formatted timestamp, e.g. '[2025 05 21 오후 05:02]'
        color_system: ANSI color system for the tag, None for plain text

    Returns:
        Formatted log line
    """
    name = level.name if isinstance(level, LogLevel) else str(level).strip().upper()
    level_style = LOG_STYLES[LogLevel.parse(name)]
    tag = level_style.style.render(
        f"{level_style.prefix}[{name}]", color_system=color_system
    )
    return f"{timestamp} {tag} {message}"


def format_timestamp(moment: datetime) -> str:
    """
    Render a timestamp in the Korean locale display style.

    Mirrors ``toLocaleString('ko-KR')`` with 2-digit fields and a 12-hour
    clock, literal dots removed and whitespace collapsed:
    ``2025 05 21 오후 05:02``.
    """
    meridiem = "오전" if moment.hour < 12 else "오후"
    return f"{moment:%Y %m %d} {meridiem} {moment:%I:%M}"


@dataclass(frozen=True)
class LogConfig:
    """Explicit logger configuration."""

    threshold: LogLevel = LogLevel.INFO
    timezone: str = DEFAULT_TIMEZONE
    color: bool = True

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None, **overrides) -> "LogConfig":
        """
        Build a configuration from the LOG_LEVEL environment variable.

        Unset or unrecognized values fall back to INFO.
        """
        if environ is None:
            environ = os.environ
        threshold = LogLevel.parse(environ.get(LOG_LEVEL_ENV), default=LogLevel.INFO)
        return cls(threshold=threshold, **overrides)


class Logger:
    """
    Leveled console logger.

    Accepted messages are printed as one line on standard output and the
    formatted line is returned; filtered messages print nothing and return
    None.
    """

    def __init__(
        self,
        config: LogConfig | None = None,
        console: Console | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        self.config = config or LogConfig.from_env()
        self.console = console or Console(highlight=False)
        self._tz = ZoneInfo(self.config.timezone)
        self._clock = clock or (lambda: datetime.now(self._tz))

    def is_enabled_for(self, level: "str | LogLevel") -> bool:
        return LogLevel.parse(level) >= self.config.threshold

    def now(self) -> str:
        moment = self._clock()
        if moment.tzinfo is not None:
            moment = moment.astimezone(self._tz)
        return format_timestamp(moment)

    def log(self, message: str, level: "str | LogLevel" = "LOG") -> str | None:
        """
        Log a message at the given level.

        Args:
            message: Message text
            level: Level name (case-insensitive); unknown names become LOG

        Returns:
            The formatted line if it was printed, otherwise None
        """
        level = LogLevel.parse(level)
        if not self.is_enabled_for(level):
            return None

        formatted = format_log_message(
            level,
            message,
            f"[{self.now()}]",
            color_system=ColorSystem.STANDARD if self.config.color else None,
        )
        # Written as-is so the output is exactly the returned line.
        stream = self.console.file
        stream.write(f"{formatted}\n")
        stream.flush()
        return formatted

    def debug(self, message: str) -> str | None:
        return self.log(message, LogLevel.DEBUG)

    def info(self, message: str) -> str | None:
        return self.log(message, LogLevel.INFO)

    def warn(self, message: str) -> str | None:
        return self.log(message, LogLevel.WARN)

    def error(self, message: str) -> str | None:
        return self.log(message, LogLevel.ERROR)


_default_logger: Logger | None = None


def get_logger() -> Logger:
    """Return the process-wide logger, configured from the environment on first use."""
    global _default_logger
    if _default_logger is None:
        _default_logger = Logger(LogConfig.from_env())
    return _default_logger


def reset_logger() -> None:
    """Drop the process-wide logger so the next use re-reads the environment."""
    global _default_logger
    _default_logger = None


def log(message: str, level: "str | LogLevel" = "LOG") -> str | None:
    """Log through the process-wide logger."""
    return get_logger().log(message, level)
