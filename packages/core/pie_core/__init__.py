"""Shared settings and logging for PIE downloading tools."""

from .config import DownloadConfig, config_path, load_config, save_config
from .logging_setup import JsonFormatter, configure_logging, get_logger

__all__ = [
    "DownloadConfig",
    "JsonFormatter",
    "config_path",
    "configure_logging",
    "get_logger",
    "load_config",
    "save_config",
]
