"""
Tests for leveled console logging.
"""

from datetime import datetime, timezone
from zoneinfo import ZoneInfo

import pytest
from rich.color import ColorSystem
from rich.style import Style

from participant_tracker.util import log as log_module
from participant_tracker.util.log import (
    LOG_LEVELS,
    LogConfig,
    Logger,
    LogLevel,
    format_log_message,
    format_timestamp,
    get_logger,
    log,
)

SEOUL = ZoneInfo("Asia/Seoul")
TIMESTAMP = "[2025 05 21 오후 05:02]"


class TestLogLevel:
    """Tests for the level enumeration."""

    def test_ranks(self):
        """Levels are ordered LOG < DEBUG < INFO < WARN < ERROR."""
        assert LOG_LEVELS == {"LOG": 0, "DEBUG": 1, "INFO": 2, "WARN": 3, "ERROR": 4}
        assert LogLevel.LOG < LogLevel.DEBUG < LogLevel.INFO < LogLevel.WARN < LogLevel.ERROR

    def test_parse_case_insensitive(self):
        """Names are matched regardless of case."""
        assert LogLevel.parse("warn") is LogLevel.WARN
        assert LogLevel.parse("Error") is LogLevel.ERROR
        assert LogLevel.parse(LogLevel.DEBUG) is LogLevel.DEBUG

    def test_parse_unknown_uses_default(self):
        """Unknown names fall back to LOG, or to the given default."""
        assert LogLevel.parse("verbose") is LogLevel.LOG
        assert LogLevel.parse(None) is LogLevel.LOG
        assert LogLevel.parse("verbose", default=LogLevel.INFO) is LogLevel.INFO


class TestFormatLogMessage:
    """Tests for format_log_message."""

    def test_plain_format(self):
        """Without colors the line is timestamp, tagged level, message."""
        line = format_log_message("INFO", "hello", TIMESTAMP, color_system=None)
        assert line == f"{TIMESTAMP} ℹ️ [INFO] hello"

    @pytest.mark.parametrize(
        "level,prefix",
        [("ERROR", "🚨 "), ("WARN", "⚠️ "), ("INFO", "ℹ️ "), ("DEBUG", "🔍 "), ("LOG", "📝 ")],
    )
    def test_level_prefixes(self, level, prefix):
        """Each level has its own emoji prefix."""
        line = format_log_message(level, "msg", TIMESTAMP, color_system=None)
        assert f"{prefix}[{level}]" in line

    def test_error_and_warn_have_background(self):
        """ERROR and WARN tags carry a background and a foreground color."""
        error = format_log_message("ERROR", "boom", TIMESTAMP)
        warn = format_log_message("WARN", "careful", TIMESTAMP)

        expected_error = Style(color="white", bgcolor="red").render(
            "🚨 [ERROR]", color_system=ColorSystem.STANDARD
        )
        expected_warn = Style(color="black", bgcolor="yellow").render(
            "⚠️ [WARN]", color_system=ColorSystem.STANDARD
        )
        assert error == f"{TIMESTAMP} {expected_error} boom"
        assert warn == f"{TIMESTAMP} {expected_warn} careful"

    def test_info_has_foreground_only(self):
        """Other levels only get a foreground color."""
        line = format_log_message("INFO", "hi", TIMESTAMP)
        assert line == f"{TIMESTAMP} \x1b[32mℹ️ [INFO]\x1b[0m hi"

    def test_lowercase_level(self):
        """Level names are case-insensitive."""
        line = format_log_message("debug", "x", TIMESTAMP, color_system=None)
        assert "🔍 [DEBUG]" in line

    def test_level_name_whitespace_stripped(self):
        """Padded level names are normalized for both style and tag."""
        line = format_log_message(" info ", "x", TIMESTAMP, color_system=None)
        assert line == f"{TIMESTAMP} ℹ️ [INFO] x"

    def test_unknown_level_uses_log_style(self):
        """Unknown levels are styled like LOG."""
        line = format_log_message("TRACE", "x", TIMESTAMP, color_system=None)
        assert line == f"{TIMESTAMP} 📝 [TRACE] x"


class TestFormatTimestamp:
    """Tests for the Korean locale timestamp."""

    def test_afternoon(self):
        """Afternoon hours use 오후 and a 12-hour clock."""
        moment = datetime(2025, 5, 21, 17, 2, tzinfo=SEOUL)
        assert format_timestamp(moment) == "2025 05 21 오후 05:02"

    def test_morning(self):
        """Morning hours use 오전."""
        moment = datetime(2025, 1, 3, 9, 7, tzinfo=SEOUL)
        assert format_timestamp(moment) == "2025 01 03 오전 09:07"

    def test_midnight_and_noon(self):
        """Midnight is 오전 12, noon is 오후 12."""
        assert format_timestamp(datetime(2025, 1, 3, 0, 5)) == "2025 01 03 오전 12:05"
        assert format_timestamp(datetime(2025, 1, 3, 12, 5)) == "2025 01 03 오후 12:05"


class TestLogger:
    """Tests for Logger.log."""

    def test_message_below_threshold_is_dropped(self, make_logger, capsys):
        """Messages under the threshold print nothing and return None."""
        logger = make_logger(threshold=LogLevel.WARN)

        assert logger.log("quiet", "INFO") is None
        assert capsys.readouterr().out == ""

    def test_message_at_threshold_is_printed(self, make_logger, capsys):
        """Accepted messages are printed once and returned."""
        logger = make_logger(threshold=LogLevel.INFO, color=False)

        result = logger.log("participants fetched", "info")

        assert result == f"{TIMESTAMP} ℹ️ [INFO] participants fetched"
        out = capsys.readouterr().out
        assert out.count("participants fetched") == 1
        assert out.endswith("\n")

    @pytest.mark.parametrize("color", [True, False])
    def test_output_is_returned_line(self, make_logger, capsys, color):
        """Exactly the returned line is written, control characters included."""
        logger = make_logger(threshold=LogLevel.LOG, color=color)

        result = logger.log("progress 50%\rdone\tok", "WARN")

        assert result.endswith("progress 50%\rdone\tok")
        assert capsys.readouterr().out == result + "\n"

    def test_is_enabled_for(self, make_logger):
        """Levels at or above the threshold are enabled."""
        logger = make_logger(threshold=LogLevel.WARN)

        assert logger.is_enabled_for("error")
        assert logger.is_enabled_for(LogLevel.WARN)
        assert not logger.is_enabled_for("info")
        assert not logger.is_enabled_for("verbose")

    def test_default_level_is_log(self, make_logger, capsys):
        """Without a level the message is logged at LOG."""
        logger = make_logger(threshold=LogLevel.LOG, color=False)

        result = logger.log("plain")

        assert "📝 [LOG] plain" in result

    def test_unknown_level_is_log(self, make_logger, capsys):
        """Unknown level names are treated as LOG and filtered as such."""
        assert make_logger(threshold=LogLevel.INFO).log("x", "verbose") is None
        result = make_logger(threshold=LogLevel.LOG, color=False).log("x", "verbose")
        assert "[LOG]" in result

    def test_clock_converted_to_timezone(self, capsys):
        """UTC clocks are shown in the configured timezone."""
        logger = Logger(
            LogConfig(threshold=LogLevel.LOG, color=False),
            clock=lambda: datetime(2025, 5, 21, 8, 2, tzinfo=timezone.utc),
        )

        result = logger.log("tz")

        assert result.startswith(TIMESTAMP)

    def test_shortcuts(self, buffer_logger):
        """debug/info/warn/error log at their level."""
        assert "[DEBUG]" in buffer_logger.debug("d")
        assert "[INFO]" in buffer_logger.info("i")
        assert "[WARN]" in buffer_logger.warn("w")
        assert "[ERROR]" in buffer_logger.error("e")
        assert buffer_logger.buffer.getvalue().count("\n") == 4


class TestLogConfigFromEnv:
    """Tests for threshold selection from LOG_LEVEL."""

    def test_default_is_info(self):
        """Unset LOG_LEVEL means INFO."""
        assert LogConfig.from_env({}).threshold is LogLevel.INFO

    def test_case_insensitive(self):
        """LOG_LEVEL is case-insensitive."""
        assert LogConfig.from_env({"LOG_LEVEL": "error"}).threshold is LogLevel.ERROR

    def test_unknown_falls_back_to_info(self):
        """Unrecognized LOG_LEVEL values fall back to INFO."""
        assert LogConfig.from_env({"LOG_LEVEL": "chatty"}).threshold is LogLevel.INFO


class TestModuleLog:
    """Tests for the process-wide logger."""

    def test_threshold_read_once(self, monkeypatch, capsys):
        """The environment is read when the default logger is first built."""
        monkeypatch.setenv("LOG_LEVEL", "ERROR")

        assert log("hidden", "WARN") is None
        monkeypatch.setenv("LOG_LEVEL", "LOG")
        assert log("still hidden", "WARN") is None
        assert capsys.readouterr().out == ""

    def test_log_prints(self, capsys):
        """Default threshold lets INFO through."""
        result = log("visible", "INFO")

        assert result is not None
        assert "visible" in result
        assert "visible" in capsys.readouterr().out

    def test_get_logger_is_shared(self):
        """get_logger returns the same instance until reset."""
        assert get_logger() is get_logger()
        first = get_logger()
        log_module.reset_logger()
        assert get_logger() is not first
