"""
component_8_logging_config.py

Central logging system for the stack-world planner.
Provides structured logging with per-handler log levels and formatting.

Features:
- Console and rotating file logging
- Separate error-only log file
- Structured formatting with timestamps and component names
- Performance tracking for planning attempts
- Contextual key=value information appended to log lines

Usage:
    from component_8_logging_config import get_logger

    logger = get_logger(__name__)
    logger.info("Plan found", extra={"length": 5, "visited": 42})
    logger.warning("Search budget exceeded", extra={"visited": 50000})
"""

import logging
import logging.handlers
import sys
import traceback
from datetime import datetime
from pathlib import Path
from types import TracebackType
from typing import Any, Dict, Literal, MutableMapping, Optional, Tuple, Type

LOG_DIR: Path = Path("logs")

DEFAULT_LOG_FILE: Path = LOG_DIR / "stackplan.log"
ERROR_LOG_FILE: Path = LOG_DIR / "stackplan_errors.log"
PERFORMANCE_LOG_FILE: Path = LOG_DIR / "stackplan_performance.log"

PERFORMANCE_LOGGER_NAME: str = "stackplan.performance"

DEFAULT_LOG_LEVEL: int = logging.INFO
CONSOLE_LOG_LEVEL: int = logging.INFO
FILE_LOG_LEVEL: int = logging.DEBUG


class PlannerLogFormatter(logging.Formatter):
    """
    Formatter for structured log output.
    Optionally colors console output by level.
    """

    # ANSI color codes for console output
    COLORS: Dict[str, str] = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
        "RESET": "\033[0m",
    }

    def __init__(self, use_colors: bool = False, include_extra: bool = True) -> None:
        self.use_colors: bool = use_colors
        self.include_extra: bool = include_extra

        # Format: [TIMESTAMP] [LEVEL] [COMPONENT] MESSAGE
        fmt = "[%(asctime)s] [%(levelname)-8s] [%(name)s] %(message)s"
        super().__init__(fmt=fmt, datefmt="%Y-%m-%d %H:%M:%S")

    def format(self, record: logging.LogRecord) -> str:
        log_message = super().format(record)

        if self.include_extra and hasattr(record, "extra_info"):
            extra_str = " | ".join(f"{k}={v}" for k, v in record.extra_info.items())
            log_message += f" | {extra_str}"

        if self.use_colors:
            color = self.COLORS.get(record.levelname, self.COLORS["RESET"])
            reset = self.COLORS["RESET"]
            log_message = f"{color}{log_message}{reset}"

        return log_message


class PerformanceLogger:
    """
    Context manager that times an operation.

    Usage:
        with PerformanceLogger(logger.logger, "Plan interpretation", index=0):
            planner.make_plan(formula)
    """

    def __init__(
        self, logger: logging.Logger, operation_name: str, **context: Any
    ) -> None:
        self.logger: logging.Logger = logger
        self.operation_name: str = operation_name
        self.context: Dict[str, Any] = context
        self.start_time: Optional[datetime] = None
        self.duration_ms: Optional[float] = None

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
        assert self.start_time is not None, "PerformanceLogger was not entered"
        self.duration_ms = (datetime.now() - self.start_time).total_seconds() * 1000

        if exc_type is None:
            self.logger.debug(
                f"END: {self.operation_name} (duration: {self.duration_ms:.2f}ms)",
                extra={"extra_info": {**self.context, "duration_ms": self.duration_ms}},
            )

            perf_logger = logging.getLogger(PERFORMANCE_LOGGER_NAME)
            perf_logger.info(
                f"{self.operation_name}: {self.duration_ms:.2f}ms",
                extra={"extra_info": {**self.context, "duration_ms": self.duration_ms}},
            )
        else:
            self.logger.error(
                f"FAILED: {self.operation_name} (duration: {self.duration_ms:.2f}ms)",
                extra={
                    "extra_info": {
                        **self.context,
                        "duration_ms": self.duration_ms,
                        "error": str(exc_val),
                    }
                },
            )

        # Propagate the exception
        return False


class StructuredLogger(logging.LoggerAdapter):
    """
    Logger adapter that stores ``extra`` as ``extra_info`` on the record,
    where PlannerLogFormatter picks it up.
    """

    def process(
        self, msg: str, kwargs: MutableMapping[str, Any]
    ) -> Tuple[str, MutableMapping[str, Any]]:
        extra = kwargs.get("extra", {})
        if extra:
            kwargs["extra"] = {"extra_info": extra}
        return msg, kwargs

    def log_exception(self, exc: Exception, message: str = "", **context: Any) -> None:
        """Log an exception with full traceback and context."""
        tb_str = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))

        self.error(
            f"{message}: {type(exc).__name__}: {str(exc)}\n{tb_str}", extra=context
        )


def setup_logging(
    console_level: int = CONSOLE_LOG_LEVEL,
    file_level: int = FILE_LOG_LEVEL,
    log_file: Optional[Path] = None,
    enable_file_logging: bool = True,
    enable_performance_logging: bool = True,
) -> None:
    """
    Configure the global logging system.

    Args:
        console_level: Log level for console output
        file_level: Log level for file output
        log_file: Path of the main log file (default: logs/stackplan.log)
        enable_file_logging: Write main and error log files
        enable_performance_logging: Write a separate performance log
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)  # Filter on handler level

    # Avoid duplicate handlers on repeated setup
    root_logger.handlers.clear()

    # === Console handler ===
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(PlannerLogFormatter(use_colors=True, include_extra=True))
    root_logger.addHandler(console_handler)

    file_path = log_file or DEFAULT_LOG_FILE

    if enable_file_logging or enable_performance_logging:
        LOG_DIR.mkdir(exist_ok=True)
        Path(file_path).parent.mkdir(parents=True, exist_ok=True)

    if enable_file_logging:
        # === Main log file ===
        file_handler = logging.handlers.RotatingFileHandler(
            file_path, maxBytes=10 * 1024 * 1024, backupCount=5, encoding="utf-8"  # 10 MB
        )
        file_handler.setLevel(file_level)
        file_handler.setFormatter(
            PlannerLogFormatter(use_colors=False, include_extra=True)
        )
        root_logger.addHandler(file_handler)

        # === Error-only log file ===
        error_handler = logging.handlers.RotatingFileHandler(
            ERROR_LOG_FILE,
            maxBytes=5 * 1024 * 1024,  # 5 MB
            backupCount=3,
            encoding="utf-8",
        )
        error_handler.setLevel(logging.ERROR)
        error_handler.setFormatter(
            PlannerLogFormatter(use_colors=False, include_extra=True)
        )
        root_logger.addHandler(error_handler)

    # === Performance logger ===
    perf_logger = logging.getLogger(PERFORMANCE_LOGGER_NAME)
    perf_logger.handlers.clear()
    if enable_performance_logging:
        perf_logger.setLevel(logging.INFO)
        perf_logger.propagate = False  # Keep timings out of the main log

        perf_handler = logging.handlers.RotatingFileHandler(
            PERFORMANCE_LOG_FILE,
            maxBytes=5 * 1024 * 1024,  # 5 MB
            backupCount=3,
            encoding="utf-8",
        )
        perf_handler.setFormatter(
            PlannerLogFormatter(use_colors=False, include_extra=True)
        )
        perf_logger.addHandler(perf_handler)

    logger = logging.getLogger("stackplan.logging_config")
    logger.info(
        "Logging initialized",
        extra={
            "extra_info": {
                "console_level": logging.getLevelName(console_level),
                "file_level": logging.getLevelName(file_level),
                "log_file": str(file_path) if enable_file_logging else None,
                "performance_logging": enable_performance_logging,
            }
        },
    )


def get_logger(name: str) -> StructuredLogger:
    """
    Create a structured logger for a component.

    Args:
        name: Component name (usually __name__)

    Returns:
        StructuredLogger instance

    Example:
        logger = get_logger(__name__)
        logger.info("Interpretation planned", extra={"index": 0, "length": 3})
    """
    base_logger = logging.getLogger(name)
    return StructuredLogger(base_logger, {})


# === Convenience functions ===


def log_component_start(
    logger: StructuredLogger, component_name: str, **context: Any
) -> None:
    """Log the start of a component operation."""
    logger.info(f"START: {component_name}", extra=context)


def log_component_end(
    logger: StructuredLogger, component_name: str, **context: Any
) -> None:
    """Log the successful end of a component operation."""
    logger.info(f"END: {component_name}", extra=context)


def log_component_error(
    logger: StructuredLogger, component_name: str, error: Exception, **context: Any
) -> None:
    """Log a component error with full traceback."""
    logger.log_exception(error, message=f"ERROR in {component_name}", **context)
