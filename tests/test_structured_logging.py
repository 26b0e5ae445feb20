import logging

from playlog.core.structured_logging import StructuredLogger, setup_logging


def test_message_without_data_is_unchanged():
    assert StructuredLogger.format_message("done", {}) == "done"


def test_structured_data_appended():
    msg = StructuredLogger.format_message("Export complete", {"events": 3, "path": "a.log"})
    assert msg == "Export complete [events=3 path=a.log]"


def test_logger_emits_structured_record(caplog):
    log = StructuredLogger("playlog.test")
    with caplog.at_level(logging.INFO, logger="playlog.test"):
        log.info("Export complete", events=7)
    assert "Export complete [events=7]" in caplog.text


def test_setup_logging_returns_project_logger():
    log = setup_logging("INFO")
    assert isinstance(log, StructuredLogger)
    assert log.logger.name == "playlog"
