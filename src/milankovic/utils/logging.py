"""
Logging utilities for milankovic: handler setup, step timing and reporting
of numerical fallbacks.
"""

import logging
import sys
import time
import traceback
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional

LOGGER_NAME = "milankovic"

_FORMATS = {
    "detailed": ("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s", "%Y-%m-%d %H:%M:%S"),
    "simple": ("%(levelname)s: %(message)s", None),
    "minimal": ("%(message)s", None),
}

# Global timing logger instance
_timing_logger: Optional["TimingLogger"] = None


class TimingLogger:
    """Records the duration and outcome of named evaluation steps."""

    def __init__(self):
        self.steps: List[Dict[str, Any]] = []
        self.current_step: Optional[Dict[str, Any]] = None
        self.start_time: float = time.perf_counter()

    def start_step(self, name: str) -> None:
        """Open a new step; an unfinished previous step is discarded."""
        self.current_step = {
            "name": name,
            "start": time.perf_counter(),
            "duration": None,
            "success": None,
        }

    def end_step(self, success: bool = True) -> float:
        """Close the current step and return its duration in seconds."""
        if self.current_step is None:
            return 0.0

        step = self.current_step
        step["duration"] = time.perf_counter() - step["start"]
        step["success"] = success
        self.steps.append(step)
        self.current_step = None
        return step["duration"]

    @property
    def n_failed(self) -> int:
        return sum(1 for step in self.steps if not step["success"])

    def get_summary(self) -> str:
        """Formatted table of step durations."""
        total = time.perf_counter() - self.start_time
        lines = ["", "═" * 60, "  TIMING SUMMARY", "─" * 60]
        for step in self.steps:
            mark = "✓" if step["success"] else "✗"
            lines.append(f"  {mark} {step['name']}: {step['duration'] or 0.0:.3f}s")
        lines.extend(["─" * 60, f"  Total: {total:.3f}s", "═" * 60])
        return "\n".join(lines)


def get_timing_logger() -> Optional[TimingLogger]:
    """Get global timing logger instance."""
    return _timing_logger


def setup_logging(
    level: str = "INFO",
    log_dir: Optional[str] = None,
    run_name: Optional[str] = None,
    format_style: str = "detailed",
    include_timestamp: bool = False,
) -> logging.Logger:
    """
    Configure the ``milankovic`` logger.

    Parameters
    ----------
    level : str
        Console log level (DEBUG, INFO, WARNING, ERROR).
    log_dir : str, optional
        Directory for a log file. No file is written when omitted.
    run_name : str, optional
        Stem of the log file name. Default "milankovic".
    format_style : str
        'detailed', 'simple' or 'minimal'.
    include_timestamp : bool
        Append a timestamp to the log file name.

    Returns
    -------
    logging.Logger
        The configured package logger.
    """
    global _timing_logger
    _timing_logger = TimingLogger()

    numeric_level = getattr(logging, level.upper(), logging.INFO)
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if log_dir else numeric_level)
    logger.handlers = []

    fmt, datefmt = _FORMATS.get(format_style, _FORMATS["minimal"])
    formatter = logging.Formatter(fmt, datefmt=datefmt)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_dir:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)

        stem = run_name or LOGGER_NAME
        if include_timestamp:
            stem = f"{stem}_{datetime.now().strftime('%Y%m%d_%H%M%S')}"

        file_handler = logging.FileHandler(log_path / f"{stem}.log")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def start_step(name: str) -> None:
    """Start timing a step (global convenience function)."""
    logging.getLogger(LOGGER_NAME).debug(f"Starting: {name}")
    if _timing_logger:
        _timing_logger.start_step(name)


def end_step(success: bool = True) -> float:
    """End timing the current step (global convenience function)."""
    duration = 0.0
    if _timing_logger:
        duration = _timing_logger.end_step(success)

    status = "completed" if success else "FAILED"
    logging.getLogger(LOGGER_NAME).debug(f"Step {status} in {duration:.3f}s")
    return duration


@contextmanager
def timed_step(name: str) -> Iterator[None]:
    """Wrap a block in start_step/end_step; exceptions are logged and re-raised."""
    start_step(name)
    try:
        yield
    except Exception as e:
        log_error(e, name)
        end_step(success=False)
        raise
    end_step(success=True)


def log_error(error: Exception, context: str = "") -> None:
    """Log an error with full traceback at DEBUG."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.error(f"ERROR in {context}: {type(error).__name__}: {error}")
    logger.debug(traceback.format_exc())


def log_calculation_issue(
    issue_type: str,
    description: str,
    details: Optional[Dict[str, Any]] = None,
) -> None:
    """Report a numerical issue (non-finite value, fallback result, ...)."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.warning(f"Calculation issue [{issue_type}]: {description}")
    if details:
        logger.debug(f"  Details: {details}")
