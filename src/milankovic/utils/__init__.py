"""Utility functions for milankovic."""

from milankovic.utils.logging import (
    setup_logging,
    start_step,
    end_step,
    timed_step,
    log_error,
    log_calculation_issue,
    get_timing_logger,
    TimingLogger,
)
from milankovic.utils.config import load_config, save_config, model_settings, DEFAULT_CONFIG

__all__ = [
    "setup_logging",
    "start_step",
    "end_step",
    "timed_step",
    "log_error",
    "log_calculation_issue",
    "get_timing_logger",
    "TimingLogger",
    "load_config",
    "save_config",
    "model_settings",
    "DEFAULT_CONFIG",
]
