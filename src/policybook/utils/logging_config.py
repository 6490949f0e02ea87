# src/policybook/utils/logging_config.py
"""
Centralized logging configuration for policybook.

Usage:
    from policybook.utils.logging_config import Logger, LogFiles

    Logger.info("Parsed policy input", file=LogFiles.POLICY)
    Logger.error("Rejected policy input", file=LogFiles.ERROR)

    # Log to default file (logs/policybook.log)
    Logger.info("General message")

Configuration via environment variables:
    POLICYBOOK_LOG_LEVEL: DEBUG, INFO, WARNING, ERROR, CRITICAL (default: INFO)
    POLICYBOOK_LOG_DIR: Base directory for log files (default: logs/)
    POLICYBOOK_LOG_MAX_BYTES: Max size per log file in bytes (default: 10MB)
    POLICYBOOK_LOG_BACKUP_COUNT: Number of backup files to keep (default: 5)
"""

from __future__ import annotations

import inspect
import logging
import os
import uuid
from contextvars import ContextVar
from datetime import datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Dict, Optional

import yaml

_trace_id_var: ContextVar[Optional[str]] = ContextVar("trace_id", default=None)

DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_LOG_DIR = "logs"
DEFAULT_LOG_FILE = "policybook.log"
DEFAULT_MAX_BYTES = 10 * 1024 * 1024  # 10 MB
DEFAULT_BACKUP_COUNT = 5
DEFAULT_FORMAT = "{timestamp} [{level}] [{trace_id}] {filename}:{lineno} - {message}"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_CONFIG_FILE = Path(__file__).parent / "log_config.yaml"

_DEFAULT_FILES: Dict[str, str] = {
    "policy": "policy/policy.log",
    "error": "errors/error.log",
}


class _LogFilesMeta(type):
    """Metaclass to allow attribute access like LogFiles.POLICY."""

    def __getattr__(cls, name: str) -> str:
        if name.startswith("_"):
            raise AttributeError(name)
        cls._load()
        key = name if name in cls._files else name.lower()
        if key in cls._files:
            return cls._files[key]
        raise AttributeError(f"Log file '{name}' not found in config")


class LogFiles(metaclass=_LogFilesMeta):
    """
    Log file paths loaded from log_config.yaml next to this module.

    To add a new log file, add an entry under ``files`` in log_config.yaml
    and access it as ``LogFiles.YOUR_NAME``.
    """

    _loaded = False
    _files: Dict[str, str] = {}

    @classmethod
    def _load(cls) -> None:
        if cls._loaded:
            return

        cls._files = dict(_DEFAULT_FILES)
        cls._files.update(_read_config_files(LOG_CONFIG_FILE))
        cls._loaded = True

    @classmethod
    def get(cls, name: str) -> str:
        """Get log file path by name, falling back to ``<name>/<name>.log``."""
        cls._load()
        if name in cls._files:
            return cls._files[name]
        key = name.lower()
        if key in cls._files:
            return cls._files[key]
        return f"{key}/{key}.log"


def _read_config_files(config_path: Path) -> Dict[str, str]:
    """Read the ``files`` mapping from a YAML config; missing or broken files yield {}."""
    if not config_path.exists():
        return {}
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f)
    except (OSError, yaml.YAMLError):
        return {}
    if not isinstance(config, dict) or not isinstance(config.get("files"), dict):
        return {}
    return {str(k): str(v) for k, v in config["files"].items()}


_initialized = False
_config: dict = {}
_file_handlers: Dict[str, RotatingFileHandler] = {}


def _get_config() -> dict:
    """Get logging configuration from environment variables."""
    return {
        "level": os.environ.get("POLICYBOOK_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
        "base_dir": os.environ.get("POLICYBOOK_LOG_DIR", DEFAULT_LOG_DIR),
        "max_bytes": int(os.environ.get("POLICYBOOK_LOG_MAX_BYTES", DEFAULT_MAX_BYTES)),
        "backup_count": int(
            os.environ.get("POLICYBOOK_LOG_BACKUP_COUNT", DEFAULT_BACKUP_COUNT)
        ),
    }


def _get_file_handler(file_path: str) -> RotatingFileHandler:
    if file_path not in _file_handlers:
        path = Path(file_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        _file_handlers[file_path] = RotatingFileHandler(
            filename=str(path),
            maxBytes=_config.get("max_bytes", DEFAULT_MAX_BYTES),
            backupCount=_config.get("backup_count", DEFAULT_BACKUP_COUNT),
            encoding="utf-8",
        )
    return _file_handlers[file_path]


def _format_message(level: str, message: str, filename: str, lineno: int) -> str:
    return DEFAULT_FORMAT.format(
        timestamp=datetime.now().strftime(DEFAULT_DATE_FORMAT),
        level=level,
        trace_id=_trace_id_var.get() or "-",
        filename=filename,
        lineno=lineno,
        message=message,
    )


def _resolve_file_path(file: Optional[str]) -> str:
    base_dir = Path(_config.get("base_dir", DEFAULT_LOG_DIR))
    return str(base_dir / (file or DEFAULT_LOG_FILE))


def _should_log(level: str) -> bool:
    current = logging.getLevelName(_config.get("level", DEFAULT_LOG_LEVEL))
    if not isinstance(current, int):
        current = logging.INFO
    return logging.getLevelName(level) >= current


def _write_log(level: str, message: str, file: Optional[str] = None) -> None:
    if not _should_log(level):
        return

    # Skip _write_log and the public Logger method
    frame = inspect.currentframe()
    caller_frame = frame.f_back.f_back if frame and frame.f_back else None
    if caller_frame:
        filename = os.path.basename(caller_frame.f_code.co_filename)
        lineno = caller_frame.f_lineno
    else:
        filename = "unknown"
        lineno = 0

    formatted = _format_message(level, message, filename, lineno)
    handler = _get_file_handler(_resolve_file_path(file))
    # emit() goes through shouldRollover, so files rotate at max_bytes
    handler.emit(logging.makeLogRecord({"msg": formatted, "levelname": level}))


class Logger:
    """
    Static logger writing to per-topic files.

    Auto-initializes from the environment on first use. Call ``Logger.init``
    at startup to override settings explicitly.
    """

    @staticmethod
    def init(
        level: Optional[str] = None,
        base_dir: Optional[str] = None,
        max_bytes: Optional[int] = None,
        backup_count: Optional[int] = None,
    ) -> None:
        """
        Initialize the logging system. Later calls are no-ops until ``reset``.

        Args:
            level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            base_dir: Base directory for all log files
            max_bytes: Maximum size of each log file before rotation
            backup_count: Number of backup files to keep
        """
        global _initialized, _config

        if _initialized:
            return

        _config = _get_config()
        if level:
            _config["level"] = level.upper()
        if base_dir:
            _config["base_dir"] = base_dir
        if max_bytes:
            _config["max_bytes"] = max_bytes
        if backup_count:
            _config["backup_count"] = backup_count

        _initialized = True

    @staticmethod
    def _ensure_init() -> None:
        if not _initialized:
            Logger.init()

    @staticmethod
    def debug(message: str, file: Optional[str] = None) -> None:
        Logger._ensure_init()
        _write_log("DEBUG", message, file)

    @staticmethod
    def info(message: str, file: Optional[str] = None) -> None:
        Logger._ensure_init()
        _write_log("INFO", message, file)

    @staticmethod
    def warning(message: str, file: Optional[str] = None) -> None:
        Logger._ensure_init()
        _write_log("WARNING", message, file)

    @staticmethod
    def error(message: str, file: Optional[str] = None) -> None:
        Logger._ensure_init()
        _write_log("ERROR", message, file)

    @staticmethod
    def critical(message: str, file: Optional[str] = None) -> None:
        Logger._ensure_init()
        _write_log("CRITICAL", message, file)

    @staticmethod
    def set_level(level: str) -> None:
        """Change the log level at runtime."""
        Logger._ensure_init()
        _config["level"] = level.upper()

    @staticmethod
    def close() -> None:
        """Close all file handlers."""
        for handler in _file_handlers.values():
            handler.close()
        _file_handlers.clear()

    @staticmethod
    def reset() -> None:
        """Close handlers and drop configuration so the next call re-reads it."""
        global _initialized, _config
        Logger.close()
        _config = {}
        _initialized = False


def generate_trace_id() -> str:
    return f"req-{uuid.uuid4().hex[:12]}"


def set_trace_id(trace_id: Optional[str] = None) -> str:
    """Set the trace ID for the current context, generating one if omitted."""
    tid = trace_id or generate_trace_id()
    _trace_id_var.set(tid)
    return tid


def get_trace_id() -> Optional[str]:
    return _trace_id_var.get()


def clear_trace_id() -> None:
    _trace_id_var.set(None)
