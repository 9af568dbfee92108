"""Logging setup for the planner and its command-line tool.

Configuration comes from a YAML file (or built-in defaults) and drives a
console handler, a combined log file and per-component level overrides.
Library modules never configure logging themselves; they just use
``logging.getLogger(__name__)``.

Platform-specific log locations:
    - macOS: ~/Library/Logs/MileHigh/milehigh.log
    - Linux: ~/.milehigh/logs/milehigh.log
    - Windows: %AppData%/MileHigh/Logs/milehigh.log

Each start rotates the combined log, keeping the last 5 runs.

Typical usage example:
    from milehigh.core.logging_system import get_logger, initialize_logging

    initialize_logging("config/logging.yaml")
    log = get_logger("milehigh.planning.planner")
    log.info("Planner ready")
"""

import logging
import os
import platform
import time
from pathlib import Path
from typing import Any

import yaml

_logging_config: dict[str, Any] = {}
_initialized = False


class LoggingError(Exception):
    """Raised when logging system operations fail."""


def get_platform_log_dir() -> Path:
    """Get the platform-appropriate log directory."""
    system = platform.system()

    if system == "Darwin":
        return Path.home() / "Library" / "Logs" / "MileHigh"
    elif system == "Windows":
        appdata = Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))
        return appdata / "MileHigh" / "Logs"
    else:
        return Path.home() / ".milehigh" / "logs"


def rotate_logs(log_dir: Path, log_filename: str = "milehigh.log", keep_count: int = 5) -> None:
    """Rotate logs on startup, keeping the last ``keep_count`` runs.

    ``milehigh.log`` becomes ``milehigh.log.1``, older files shift by one
    and the file beyond ``keep_count`` is deleted.
    """
    log_file = log_dir / log_filename
    if not log_file.exists():
        return

    oldest_log = log_dir / f"{log_filename}.{keep_count}"
    if oldest_log.exists():
        oldest_log.unlink()

    for i in range(keep_count - 1, 0, -1):
        old_log = log_dir / f"{log_filename}.{i}"
        if old_log.exists():
            old_log.rename(log_dir / f"{log_filename}.{i + 1}")

    log_file.rename(log_dir / f"{log_filename}.1")


def _get_default_config() -> dict[str, Any]:
    return {
        "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        "date_format": "%Y-%m-%d %H:%M:%S",
        "log_dir": "logs",
        "combined_log": {
            "enabled": True,
            "filename": "milehigh.log",
            "backup_count": 5,
        },
        "console": {
            "enabled": True,
            "level": "INFO",
        },
        "components": {},
    }


def initialize_logging(
    config_path: str | Path | None = None, use_platform_dir: bool = True
) -> None:
    """Configure the root logger.

    Call once at startup, before any planning happens.

    Args:
        config_path: Logging YAML file. Built-in defaults are used when None.
        use_platform_dir: Write the log file to the platform log directory
            instead of the ``log_dir`` from the configuration.

    Raises:
        LoggingError: If the configuration cannot be loaded or applied.
    """
    global _logging_config, _initialized

    config = _get_default_config()
    if config_path:
        config_path = Path(config_path)
        if not config_path.exists():
            raise LoggingError(f"Logging config file not found: {config_path}")
        try:
            with config_path.open("r", encoding="utf-8") as f:
                loaded = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise LoggingError(f"Failed to load logging config: {e}") from e
        if not isinstance(loaded, dict):
            raise LoggingError(f"Logging config root must be a mapping: {config_path}")
        config.update(loaded)

    if use_platform_dir:
        config["log_dir"] = str(get_platform_log_dir())

    _logging_config = config

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    root_logger.handlers.clear()

    formatter = _get_formatter()

    console_config = config.get("console", {})
    if console_config.get("enabled", True):
        console_handler = logging.StreamHandler()
        console_handler.setLevel(_level(console_config.get("level", "INFO")))
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

    combined_config = config.get("combined_log", {})
    if combined_config.get("enabled", True):
        log_dir = Path(config.get("log_dir", "logs"))
        log_filename = combined_config.get("filename", "milehigh.log")
        try:
            log_dir.mkdir(parents=True, exist_ok=True)
            rotate_logs(log_dir, log_filename, combined_config.get("backup_count", 5))
            file_handler = logging.FileHandler(log_dir / log_filename, mode="w", encoding="utf-8")
        except OSError as e:
            raise LoggingError(f"Cannot open log file in {log_dir}: {e}") from e
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    for name, component_config in (config.get("components") or {}).items():
        component_logger = logging.getLogger(name)
        if not component_config.get("enabled", True):
            component_logger.disabled = True
        elif "level" in component_config:
            component_logger.setLevel(_level(component_config["level"]))

    _initialized = True


def _level(name: str) -> int:
    level = logging.getLevelName(str(name).upper())
    if not isinstance(level, int):
        raise LoggingError(f"Unknown log level: {name}")
    return level


class MillisecondFormatter(logging.Formatter):
    """Formatter that appends milliseconds with a dot separator."""

    def formatTime(self, record, datefmt=None):
        ct = self.converter(record.created)
        s = time.strftime(datefmt or "%Y-%m-%d %H:%M:%S", ct)
        return f"{s}.{int(record.msecs):03d}"


def _get_formatter() -> logging.Formatter:
    fmt = _logging_config.get("format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    datefmt = _logging_config.get("date_format", "%Y-%m-%d %H:%M:%S")
    return MillisecondFormatter(fmt, datefmt)


def get_logger(name: str) -> logging.Logger:
    """Get a logger, initializing logging with defaults on first use.

    Note:
        Use lazy formatting (%) instead of f-strings.
    """
    if not _initialized:
        initialize_logging()
    return logging.getLogger(name)


def shutdown_logging() -> None:
    """Flush and close all handlers."""
    global _initialized
    logging.shutdown()
    _initialized = False
