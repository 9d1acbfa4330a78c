# utils/logger.py
# This file is part of Procov - Process Model Test Coverage
#
# Logging utility for coverage collection with configurable levels

import logging
import sys
from enum import Enum
from typing import Iterable, Optional


class LogLevel(Enum):
    """Log levels for coverage collection."""

    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR


class CoverageLogger:
    """Centralized logger for coverage collection with structured output."""

    def __init__(self, name: str = "process_coverage", level: LogLevel = LogLevel.INFO):
        """Initialize the coverage logger.

        Args:
            name: Logger name (typically module name)
            level: Default logging level
        """
        self.logger = logging.getLogger(name)
        self.logger.setLevel(level.value)

        # Remove existing handlers to avoid duplicates
        self.logger.handlers.clear()

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level.value)
        console_handler.setFormatter(CoverageFormatter())

        self.logger.addHandler(console_handler)

        # Prevent propagation to root logger
        self.logger.propagate = False

    def set_level(self, level: LogLevel):
        """Change the logging level."""
        self.logger.setLevel(level.value)
        for handler in self.logger.handlers:
            handler.setLevel(level.value)

    # Core logging methods
    def debug(self, message: str, **kwargs):
        """Log debug message (detailed internal state)."""
        self.logger.debug(message, **kwargs)

    def info(self, message: str, **kwargs):
        """Log info message (general progress)."""
        self.logger.info(message, **kwargs)

    def warning(self, message: str, **kwargs):
        """Log warning message (unexpected but recoverable)."""
        self.logger.warning(message, **kwargs)

    def error(self, message: str, **kwargs):
        """Log error message (serious problems)."""
        self.logger.error(message, **kwargs)

    # Specialized methods for coverage collection events
    def window_opened(self, method_name: str, watermark: int):
        """Log the start of a per-test accumulation window."""
        self.debug(f"    ▶ {method_name}: window opened at position {watermark}")

    def window_folded(self, method_name: str, marks: int, models: Iterable[str]):
        """Log folding of a per-test window into the suite aggregate."""
        models_str = ", ".join(sorted(models)) or "none"
        self.debug(f"    ■ {method_name}: folded {marks} marks (models: {models_str})")

    def method_coverage(self, method_name: str, ratio: float):
        """Log the coverage ratio of a single test method."""
        self.info(f"Method coverage {method_name}: {ratio:.2%}")

    def class_coverage(self, suite_name: str, ratio: Optional[float]):
        """Log the coverage ratio of a whole test class."""
        if ratio is None:
            self.info(f"Class coverage {suite_name}: n/a")
        else:
            self.info(f"Class coverage {suite_name}: {ratio:.2%}")

    def inconsistent_deployment(self, suite_name: str, model_sets: Iterable[Iterable[str]]):
        """Log that class coverage is undefined for mismatched deployments."""
        sets_str = " vs ".join("{" + ", ".join(sorted(s)) + "}" for s in model_sets)
        self.warning(
            f"⚠️  Class coverage for {suite_name} is undefined: "
            f"tests touched different model sets ({sets_str})"
        )

    def condition_result(self, target: str, description: str, holds: bool):
        """Log the outcome of a single coverage condition."""
        if holds:
            self.debug(f"      ✅ {target}: {description}")
        else:
            self.error(f"❌ {target}: {description} not met")

    def missing_elements(self, target: str, missing: Iterable[str]):
        """Log elements that were never reached."""
        missing_str = ", ".join(missing)
        if missing_str:
            self.debug(f"      {target} missing: {missing_str}")


class CoverageFormatter(logging.Formatter):
    """Custom formatter for coverage logging with clean output."""

    def format(self, record):
        # For INFO level and above, show message only (clean output)
        if record.levelno >= logging.INFO:
            return record.getMessage()

        if record.levelno == logging.DEBUG:
            return f"[DEBUG] {record.getMessage()}"

        return f"[{record.levelname}] {record.getMessage()}"


# Global logger instance
_global_logger: Optional[CoverageLogger] = None


def get_logger(name: str = "process_coverage") -> CoverageLogger:
    """Get or create the global coverage logger instance.

    Args:
        name: Logger name (default: "process_coverage")

    Returns:
        CoverageLogger instance
    """
    global _global_logger
    if _global_logger is None:
        _global_logger = CoverageLogger(name)
    return _global_logger


def set_log_level(level: LogLevel):
    """Set the global log level.

    Args:
        level: New log level
    """
    get_logger().set_level(level)


def configure_logging(verbose: bool = False, debug: bool = False):
    """Configure logging based on command line flags.

    Args:
        verbose: Enable verbose (INFO) output
        debug: Enable debug output (overrides verbose)
    """
    if debug:
        set_log_level(LogLevel.DEBUG)
    elif verbose:
        set_log_level(LogLevel.INFO)
    else:
        set_log_level(LogLevel.WARNING)
