"""
Tests für component_15_logging_config

Testet Formatter, strukturierten Logger, Exception-Logging und
PerformanceLogger.
"""

import logging

import pytest

from component_15_logging_config import (
    PerformanceLogger,
    ShapesLogFormatter,
    StructuredLogger,
    get_logger,
    log_component_end,
    log_component_start,
)

LOGGER_NAME = "shapes.test_logging"


@pytest.fixture
def logger():
    return get_logger(LOGGER_NAME)


def make_record(level: int = logging.INFO, **extra_info) -> logging.LogRecord:
    record = logging.LogRecord(LOGGER_NAME, level, __file__, 1, "Nachricht", None, None)
    if extra_info:
        record.extra_info = extra_info
    return record


class TestFormatter:
    def test_extra_fields_appended(self):
        """Test: Extra-Felder erscheinen als key=value hinter der Nachricht."""
        line = ShapesLogFormatter().format(make_record(seed=4711, constraints=5))

        assert f"[{LOGGER_NAME}] Nachricht | seed=4711 | constraints=5" in line
        assert "\033[" not in line

    def test_without_extra(self):
        line = ShapesLogFormatter().format(make_record())
        assert line.endswith("Nachricht")

    def test_colors(self):
        """Test: Mit Farben wird die Zeile in den Level-Farbcode gehüllt."""
        line = ShapesLogFormatter(use_colors=True).format(make_record(logging.ERROR))

        assert line.startswith(ShapesLogFormatter.COLORS["ERROR"])
        assert line.endswith(ShapesLogFormatter.COLORS["RESET"])


class TestStructuredLogger:
    def test_get_logger(self, logger):
        assert isinstance(logger, StructuredLogger)
        assert logger.logger.name == LOGGER_NAME

    def test_extra_moved_to_extra_info(self, logger, caplog):
        """Test: Das extra-Dict landet als extra_info im LogRecord."""
        with caplog.at_level(logging.INFO, logger=LOGGER_NAME):
            logger.info("Puzzle generiert", extra={"seed": 7})

        record = caplog.records[-1]
        assert record.getMessage() == "Puzzle generiert"
        assert record.extra_info == {"seed": 7}

    def test_log_exception(self, logger, caplog):
        """Test: log_exception schreibt Typ, Nachricht und Traceback als ERROR."""
        try:
            raise ValueError("kaputt")
        except ValueError as e:
            with caplog.at_level(logging.ERROR, logger=LOGGER_NAME):
                logger.log_exception(e, "Config nicht ladbar", config_path="x.yaml")

        record = caplog.records[-1]
        assert record.levelno == logging.ERROR
        assert record.getMessage().startswith("Config nicht ladbar: ValueError: kaputt")
        assert "Traceback" in record.getMessage()
        assert record.extra_info == {"config_path": "x.yaml"}

    def test_component_start_end(self, logger, caplog):
        with caplog.at_level(logging.INFO, logger=LOGGER_NAME):
            log_component_start(logger, "analyze_difficulty", difficulty=2)
            log_component_end(logger, "analyze_difficulty", seeds=3)

        messages = [record.getMessage() for record in caplog.records]
        assert messages[-2:] == ["START: analyze_difficulty", "END: analyze_difficulty"]
        assert caplog.records[-1].extra_info == {"seeds": 3}


class TestPerformanceLogger:
    def test_measures_duration(self, logger, caplog):
        """Test: Erfolgreicher Block misst die Dauer und loggt END."""
        with caplog.at_level(logging.DEBUG, logger=LOGGER_NAME):
            with PerformanceLogger(logger.logger, "solve", difficulty=3) as perf:
                pass

        assert perf.duration_ms >= 0.0
        assert any(r.getMessage().startswith("END: solve") for r in caplog.records)

    def test_exception_propagates(self, logger, caplog):
        """Test: Exceptions werden als FAILED geloggt und nicht verschluckt."""
        with caplog.at_level(logging.DEBUG, logger=LOGGER_NAME):
            with pytest.raises(RuntimeError):
                with PerformanceLogger(logger.logger, "solve"):
                    raise RuntimeError("abgebrochen")

        failed = [r for r in caplog.records if r.getMessage().startswith("FAILED: solve")]
        assert len(failed) == 1
        assert failed[0].extra_info["error"] == "abgebrochen"
