#!/usr/bin/env python3
# -*-coding: utf-8-*-
"""
Logging setup for Wishlist Sync.

Features:
- Level-specific text formatter with optional ANSI colours
- Structured JSON formatter (WISHLIST_SYNC_LOG_JSON=1)
- Rotating main and error log files
- Timing context manager that flags slow operations
"""

import json
import logging
import logging.handlers
import os
import sys
import time
from datetime import datetime, timezone
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional

ROOT_LOGGER_NAME = "wishlist_sync"
SLOW_OPERATION_SECONDS = 1.0

# =====================================================================================================
# Formatters
# =====================================================================================================

class FastFormatter(logging.Formatter):
    """Formatter with one pre-built template per level."""

    def __init__(self, enable_colors: bool = False):
        super().__init__()
        self.enable_colors = enable_colors

        self._formats = {
            logging.ERROR: "[{asctime}] ERROR   [{name}] {message}",
            logging.WARNING: "[{asctime}] WARNING [{name}] {message}",
            logging.INFO: "[{asctime}] INFO    {message}",
            logging.DEBUG: "[{asctime}] DEBUG   {name}:{lineno} - {message}"
        }
        self._formatters = {
            level: logging.Formatter(fmt, style='{', datefmt='%H:%M:%S')
            for level, fmt in self._formats.items()
        }

        self.colors = {
            'ERROR': '\033[91m',     # Red
            'WARNING': '\033[93m',   # Yellow
            'INFO': '\033[92m',      # Green
            'DEBUG': '\033[94m',     # Blue
            'RESET': '\033[0m'
        } if enable_colors else {}

    def format(self, record):
        level = record.levelno
        if level >= logging.ERROR:
            formatter = self._formatters[logging.ERROR]
        else:
            formatter = self._formatters.get(level, self._formatters[logging.INFO])

        text = formatter.format(record)
        if self.enable_colors and record.levelname in self.colors:
            text = f"{self.colors[record.levelname]}{text}{self.colors['RESET']}"
        return text


class JsonFormatter(logging.Formatter):
    """Structured JSON formatter, one object per record."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "pathname": record.pathname,
            "lineno": record.lineno,
            "thread": record.threadName,
            "process": record.process,
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


# =====================================================================================================
# Main Setup Function
# =====================================================================================================

def _env_bool(name: str, default: bool = False) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def setup_logging(
    log_level: str = "INFO",
    log_dir: Optional[str] = None,
    enable_file_logging: bool = False,
    enable_console_logging: bool = True,
    max_log_size: str = "10MB",
    backup_count: int = 3,
    structured_json: Optional[bool] = None
) -> Dict[str, Any]:
    """
    Configure the ``wishlist_sync`` logger hierarchy.

    Handlers are attached to the package logger rather than the root logger,
    so embedding applications keep control of their own logging.

    Returns:
        Dict with the package logger, the installed handlers and the log dir
    """
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)
    use_json = structured_json if structured_json is not None else _env_bool("WISHLIST_SYNC_LOG_JSON")

    package_logger = logging.getLogger(ROOT_LOGGER_NAME)
    package_logger.setLevel(numeric_level)

    for handler in package_logger.handlers[:]:
        package_logger.removeHandler(handler)
        handler.close()

    handlers = {}

    if enable_console_logging:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(numeric_level)

        enable_colors = (hasattr(sys.stdout, 'isatty') and
                         sys.stdout.isatty() and
                         os.environ.get('TERM') != 'dumb')

        console_handler.setFormatter(JsonFormatter() if use_json else FastFormatter(enable_colors=enable_colors))
        package_logger.addHandler(console_handler)
        handlers['console'] = console_handler

    log_dir_path = Path(log_dir) if log_dir else Path("logs")
    if enable_file_logging:
        log_dir_path.mkdir(parents=True, exist_ok=True)
        size_bytes = _parse_size_string(max_log_size)

        main_handler = logging.handlers.RotatingFileHandler(
            str(log_dir_path / "wishlist_sync.log"),
            maxBytes=size_bytes,
            backupCount=backup_count,
            encoding='utf-8'
        )
        main_handler.setLevel(numeric_level)
        main_handler.setFormatter(JsonFormatter() if use_json else FastFormatter())
        package_logger.addHandler(main_handler)
        handlers['main_file'] = main_handler

        error_handler = logging.handlers.RotatingFileHandler(
            str(log_dir_path / "errors.log"),
            maxBytes=size_bytes // 2,
            backupCount=backup_count,
            encoding='utf-8'
        )
        error_handler.setLevel(logging.WARNING)
        error_handler.setFormatter(JsonFormatter() if use_json else FastFormatter())
        package_logger.addHandler(error_handler)
        handlers['error_file'] = error_handler

    package_logger.debug(
        "Logging initialised (level=%s, file=%s, json=%s)",
        log_level, enable_file_logging, use_json,
    )

    return {
        'logger': package_logger,
        'handlers': handlers,
        'log_dir': log_dir_path,
    }


# =====================================================================================================
# Utility functions
# =====================================================================================================

def _parse_size_string(size_str: str) -> int:
    """Parse size string into bytes."""
    size_str = size_str.upper().strip()

    multipliers = {
        'KB': 1024,
        'MB': 1024 ** 2,
        'GB': 1024 ** 3,
        'B': 1,
    }

    for suffix, multiplier in multipliers.items():
        if size_str.endswith(suffix):
            try:
                number_str = size_str[:-len(suffix)].strip()
                number = float(number_str)
                return int(number * multiplier)
            except ValueError:
                continue

    # Plain number means bytes
    try:
        return int(float(size_str))
    except ValueError:
        pass

    return 10 * 1024 * 1024  # Default 10MB


@lru_cache(maxsize=32)
def get_logger(name: str) -> logging.Logger:
    """Get cached logger below the package logger."""
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def cleanup_logging() -> None:
    """Close and detach every handler installed by ``setup_logging``."""
    package_logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in package_logger.handlers[:]:
        package_logger.removeHandler(handler)
        handler.close()
    get_logger.cache_clear()


# =====================================================================================================
# Performance monitoring
# =====================================================================================================

class LoggingTimer:
    """Timing context manager; slow operations are logged as warnings."""

    def __init__(self, operation_name: str, logger: Optional[logging.Logger] = None,
                 slow_threshold: float = SLOW_OPERATION_SECONDS):
        self.operation_name = operation_name
        self.logger = logger or get_logger("performance")
        self.slow_threshold = slow_threshold
        self.start_time: Optional[float] = None
        self.duration: Optional[float] = None

    def __enter__(self):
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.start_time is None:
            return
        self.duration = time.perf_counter() - self.start_time
        if self.duration > self.slow_threshold:
            self.logger.warning("SLOW: %s took %.2fs", self.operation_name, self.duration)
        else:
            self.logger.debug("%s took %.4fs", self.operation_name, self.duration)
