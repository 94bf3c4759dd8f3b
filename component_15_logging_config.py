"""
component_15_logging_config.py

Zentrales Logging-System für die Shapes-Engine.
Bietet strukturiertes Logging mit Komponenten-Namen und Extra-Feldern.

Features:
- Konsolen- und Datei-basiertes Logging
- Strukturierte Formatierung mit Timestamps und Komponenten-Namen
- Separater Performance-Log für Solver- und Analyse-Läufe
- Exceptions mit Traceback (log_exception)

Verwendung:
    from component_15_logging_config import get_logger

    logger = get_logger(__name__)
    logger.info("Puzzle generiert", extra={"seed": 4711, "constraints": 5})
    logger.debug("Sackgasse", extra={"cursor": 3, "dead_ends": 17})
"""

import logging
import logging.handlers
import os
import sys
import traceback
from datetime import datetime
from pathlib import Path
from types import TracebackType
from typing import Any, Dict, Literal, MutableMapping, Optional, Tuple, Type

LOG_DIR: Path = Path(os.environ.get("SHAPES_LOG_DIR", "logs"))

DEFAULT_LOG_FILE: Path = LOG_DIR / "shapes.log"
PERFORMANCE_LOG_FILE: Path = LOG_DIR / "shapes_performance.log"

PERFORMANCE_LOGGER_NAME: str = "shapes.performance"

CONSOLE_LOG_LEVEL: int = logging.WARNING
FILE_LOG_LEVEL: int = logging.DEBUG
MAX_LOG_BYTES: int = 10 * 1024 * 1024
LOG_BACKUP_COUNT: int = 5


class ShapesLogFormatter(logging.Formatter):
    """
    Formatter für strukturierte Log-Ausgaben.

    Format: [TIMESTAMP] [LEVEL] [COMPONENT] MESSAGE | key=value | ...
    """

    COLORS: Dict[str, str] = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
        "RESET": "\033[0m",
    }

    def __init__(self, use_colors: bool = False) -> None:
        self.use_colors: bool = use_colors

        fmt = "[%(asctime)s] [%(levelname)-8s] [%(name)s] %(message)s"
        super().__init__(fmt=fmt, datefmt="%Y-%m-%d %H:%M:%S")

    def format(self, record: logging.LogRecord) -> str:
        log_message = super().format(record)

        if hasattr(record, "extra_info"):
            extra_str = " | ".join(f"{k}={v}" for k, v in record.extra_info.items())
            if extra_str:
                log_message += f" | {extra_str}"

        if self.use_colors:
            color = self.COLORS.get(record.levelname, self.COLORS["RESET"])
            reset = self.COLORS["RESET"]
            log_message = f"{color}{log_message}{reset}"

        return log_message


class PerformanceLogger:
    """
    Kontext-Manager für Performance-Tracking.

    Verwendung:
        with PerformanceLogger(logger.logger, "Solver", difficulty=3):
            PuzzleSolver(definition).solve()
    """

    def __init__(
        self, logger: logging.Logger, operation_name: str, **context: Any
    ) -> None:
        self.logger: logging.Logger = logger
        self.operation_name: str = operation_name
        self.context: Dict[str, Any] = context
        self.start_time: Optional[datetime] = None
        self.duration_ms: float = 0.0

    def __enter__(self) -> "PerformanceLogger":
        self.start_time = datetime.now()
        self.logger.debug(
            f"START: {self.operation_name}", extra={"extra_info": self.context}
        )
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> Literal[False]:
        assert (
            self.start_time is not None
        ), "PerformanceLogger wurde nicht korrekt initialisiert"
        self.duration_ms = (datetime.now() - self.start_time).total_seconds() * 1000
        info = {**self.context, "duration_ms": round(self.duration_ms, 2)}

        if exc_type is None:
            self.logger.debug(
                f"END: {self.operation_name} (duration: {self.duration_ms:.2f}ms)",
                extra={"extra_info": info},
            )
            logging.getLogger(PERFORMANCE_LOGGER_NAME).info(
                f"{self.operation_name}: {self.duration_ms:.2f}ms",
                extra={"extra_info": info},
            )
        else:
            self.logger.error(
                f"FAILED: {self.operation_name} (duration: {self.duration_ms:.2f}ms)",
                extra={"extra_info": {**info, "error": str(exc_val)}},
            )

        return False


class StructuredLogger(logging.LoggerAdapter):
    """
    Logger-Adapter, der das 'extra'-Dict als 'extra_info' im LogRecord ablegt.
    """

    def process(
        self, msg: str, kwargs: MutableMapping[str, Any]
    ) -> Tuple[str, MutableMapping[str, Any]]:
        extra = kwargs.get("extra", {})
        if extra:
            kwargs["extra"] = {"extra_info": extra}
        return msg, kwargs

    def log_exception(self, exc: Exception, message: str = "", **context: Any) -> None:
        """Loggt eine Exception mit vollständigem Traceback und Kontext."""
        tb_str = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))

        self.error(
            f"{message}: {type(exc).__name__}: {str(exc)}\n{tb_str}", extra=context
        )


def _rotating_handler(path: Path) -> logging.handlers.RotatingFileHandler:
    handler = logging.handlers.RotatingFileHandler(
        path, maxBytes=MAX_LOG_BYTES, backupCount=LOG_BACKUP_COUNT, encoding="utf-8"
    )
    handler.setFormatter(ShapesLogFormatter(use_colors=False))
    return handler


def setup_logging(
    console_level: int = CONSOLE_LOG_LEVEL, log_file: Optional[Path] = None
) -> None:
    """
    Konfiguriert das globale Logging-System.

    Args:
        console_level: Log-Level für Konsolen-Output
        log_file: Pfad zur Haupt-Log-Datei (Standard: logs/shapes.log)
    """
    file_path = Path(log_file) if log_file else DEFAULT_LOG_FILE
    file_path.parent.mkdir(parents=True, exist_ok=True)
    LOG_DIR.mkdir(parents=True, exist_ok=True)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)  # Filter auf Handler-Ebene
    root_logger.handlers.clear()

    # === Konsole ===
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(ShapesLogFormatter(use_colors=True))
    root_logger.addHandler(console_handler)

    # === Haupt-Log ===
    file_handler = _rotating_handler(file_path)
    file_handler.setLevel(FILE_LOG_LEVEL)
    root_logger.addHandler(file_handler)

    # === Performance ===
    perf_logger = logging.getLogger(PERFORMANCE_LOGGER_NAME)
    perf_logger.setLevel(logging.INFO)
    perf_logger.propagate = False
    perf_logger.handlers.clear()
    perf_logger.addHandler(_rotating_handler(PERFORMANCE_LOG_FILE))

    logging.getLogger("shapes.logging_config").info(
        "Logging-System initialisiert",
        extra={
            "extra_info": {
                "console_level": logging.getLevelName(console_level),
                "log_file": str(file_path),
            }
        },
    )



def get_logger(name: str) -> StructuredLogger:
    """
    Erstellt einen strukturierten Logger für eine Komponente.

    Args:
        name: Name der Komponente (üblicherweise __name__)

    Returns:
        StructuredLogger-Instanz

    Beispiel:
        logger = get_logger(__name__)
        logger.info("Lösung gefunden", extra={"fewest_moves": 3})
    """
    return StructuredLogger(logging.getLogger(name), {})


def log_component_start(
    logger: StructuredLogger, component_name: str, **context: Any
) -> None:
    """Loggt den Start einer Komponenten-Operation."""
    logger.info(f"START: {component_name}", extra=context)


def log_component_end(
    logger: StructuredLogger, component_name: str, **context: Any
) -> None:
    """Loggt das erfolgreiche Ende einer Komponenten-Operation."""
    logger.info(f"END: {component_name}", extra=context)


# Automatische Initialisierung beim Import
# Kann durch expliziten setup_logging()-Aufruf überschrieben werden
if not logging.getLogger().handlers:
    setup_logging()
