"""Configuration and logging helpers."""
from .config import Config, GestureThresholds
from .logger import setup_logging, GestureLogger, log_timing

__all__ = [
    "Config",
    "GestureThresholds",
    "setup_logging",
    "GestureLogger",
    "log_timing",
]
