import io
import logging

import pytest

from secexec.utils import logger as logger_module
from secexec.utils.colors import Colors
from secexec.utils.logger import ConsoleLogger, LoggingAdapter, LogLevel, get_logger, set_logger


class TestConsoleLogger:
    def test_error_goes_to_stderr(self, capsys):
        ConsoleLogger("error").error("Test error message")
        captured = capsys.readouterr()
        assert captured.err == "Test error message\n"
        assert captured.out == ""

    def test_warn_goes_to_stderr(self, capsys):
        ConsoleLogger("warn").warn("Test warning")
        assert capsys.readouterr().err == "Test warning\n"

    def test_info(self, capsys):
        ConsoleLogger("info").info("Test info")
        assert capsys.readouterr().out == "Test info\n"

    def test_verbose_is_tagged(self, capsys):
        ConsoleLogger("verbose").verbose("Test verbose")
        assert capsys.readouterr().out == "[VERBOSE] Test verbose\n"

    def test_debug_is_tagged(self, capsys):
        ConsoleLogger("debug").debug("Test debug")
        assert capsys.readouterr().out == "[DEBUG] Test debug\n"

    def test_below_threshold_is_silent(self, capsys):
        log = ConsoleLogger("error")
        log.warn("Should not log")
        log.info("Should not log")
        log.verbose("Should not log")
        log.debug("Should not log")
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == ""

    def test_all_levels_at_debug(self, capsys):
        log = ConsoleLogger("debug")
        log.error("error msg")
        log.warn("warn msg")
        log.info("info msg")
        log.verbose("verbose msg")
        log.debug("debug msg")
        captured = capsys.readouterr()
        assert captured.err == "error msg\nwarn msg\n"
        assert captured.out == "info msg\n[VERBOSE] verbose msg\n[DEBUG] debug msg\n"

    def test_warn_threshold(self, capsys):
        log = ConsoleLogger("warn")
        log.error("error - should log")
        log.warn("warn - should log")
        log.info("info - should not log")
        log.verbose("verbose - should not log")
        log.debug("debug - should not log")
        captured = capsys.readouterr()
        assert captured.err == "error - should log\nwarn - should log\n"
        assert captured.out == ""

    def test_metadata_is_appended(self, capsys):
        ConsoleLogger("info").info("User action", {"userId": 123, "action": "login"})
        assert capsys.readouterr().out == "User action {'userId': 123, 'action': 'login'}\n"

    def test_multiple_metadata(self, capsys):
        ConsoleLogger("error").error("Error occurred", "context1", {"detail": "value"}, 42)
        assert capsys.readouterr().err == "Error occurred context1 {'detail': 'value'} 42\n"

    def test_defaults_to_info(self, capsys):
        log = ConsoleLogger()
        assert log.level is LogLevel.INFO
        log.info("Should log")
        log.verbose("Should not log")
        assert capsys.readouterr().out == "Should log\n"

    def test_single_stream(self):
        stream = io.StringIO()
        log = ConsoleLogger("debug", stream=stream)
        log.error("e")
        log.debug("d")
        assert stream.getvalue() == "e\n[DEBUG] d\n"

    def test_color_when_forced(self):
        stream = io.StringIO()
        ConsoleLogger("error", stream=stream, color=True).error("bad")
        assert stream.getvalue() == f"{Colors.RED}bad{Colors.ENDC}\n"

    def test_no_color_for_plain_streams(self):
        stream = io.StringIO()
        ConsoleLogger("error", stream=stream).error("bad")
        assert stream.getvalue() == "bad\n"


class TestLogLevel:
    def test_order(self):
        assert LogLevel.ERROR < LogLevel.WARN < LogLevel.INFO < LogLevel.VERBOSE < LogLevel.DEBUG

    @pytest.mark.parametrize("name,expected", [
        ("error", LogLevel.ERROR),
        ("WARN", LogLevel.WARN),
        ("warning", LogLevel.WARN),
        (" Debug ", LogLevel.DEBUG),
        (LogLevel.VERBOSE, LogLevel.VERBOSE),
    ])
    def test_parse(self, name, expected):
        assert LogLevel.parse(name) is expected

    def test_parse_unknown(self):
        with pytest.raises(ValueError, match="unknown log level"):
            LogLevel.parse("loud")
        with pytest.raises(ValueError):
            ConsoleLogger("loud")


class TestLoggingAdapter:
    def test_forwards_levels(self, caplog):
        caplog.set_level(logging.DEBUG, logger="secexec")
        log = LoggingAdapter()
        log.error("e", 1)
        log.warn("w")
        log.info("i")
        log.verbose("v")
        log.debug("d")
        records = [(r.levelno, r.getMessage()) for r in caplog.records if r.name == "secexec"]
        assert records == [
            (logging.ERROR, "e 1"),
            (logging.WARNING, "w"),
            (logging.INFO, "i"),
            (15, "[VERBOSE] v"),
            (logging.DEBUG, "[DEBUG] d"),
        ]

    def test_percent_signs_are_not_formatted(self, caplog):
        caplog.set_level(logging.INFO, logger="secexec")
        LoggingAdapter().info("100% done %s")
        assert caplog.records[-1].getMessage() == "100% done %s"


class TestGlobalLogger:
    def test_default_is_console_logger(self):
        log = get_logger()
        assert isinstance(log, ConsoleLogger)
        assert log.level is LogLevel.INFO
        assert get_logger() is log

    def test_set_and_get(self, recording_logger):
        set_logger(recording_logger)
        assert get_logger() is recording_logger
        get_logger().error("Test error")
        get_logger().info("Test info")
        assert recording_logger.messages("error") == ["Test error"]
        assert recording_logger.messages("info") == ["Test info"]

    def test_last_write_wins(self, recording_logger):
        other = ConsoleLogger("error")
        set_logger(recording_logger)
        set_logger(other)
        assert get_logger() is other

    def test_default_level_from_env(self, monkeypatch):
        monkeypatch.setenv("SECEXEC_LOG_LEVEL", "debug")
        monkeypatch.setattr(logger_module, "_active", None)
        assert get_logger().level is LogLevel.DEBUG

    def test_default_level_from_config_file(self, isolated_home):
        isolated_home.mkdir(parents=True)
        (isolated_home / "config.toml").write_text('[logging]\nlevel = "verbose"\n')
        assert get_logger().level is LogLevel.VERBOSE

    def test_bad_configured_level_falls_back_to_info(self, monkeypatch):
        monkeypatch.setenv("SECEXEC_LOG_LEVEL", "chatty")
        assert get_logger().level is LogLevel.INFO

    def test_scalar_logging_section_uses_defaults(self, isolated_home):
        isolated_home.mkdir(parents=True)
        (isolated_home / "config.toml").write_text('logging = "debug"\n')
        log = get_logger()
        assert isinstance(log, ConsoleLogger)
        assert log.level is LogLevel.INFO
