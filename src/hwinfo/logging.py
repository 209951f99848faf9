"""
Hardware Info Logging

Console logger with optional file output, shared by the library and the CLI.

Usage:
    from hwinfo.logging import HwinfoLogger, LogConfig, get_logger

    # Library code logs through the module-level instance
    log = get_logger()
    log.debug("revision-major file is truncated")

    # The CLI installs a configured logger
    with HwinfoLogger(LogConfig(console_level=logging.DEBUG)) as log:
        log.info("Device type: mrhat")
"""

import logging
import sys
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional, TextIO


# Module-level logger instance
_hwinfo_logger: Optional['HwinfoLogger'] = None


def get_logger() -> 'HwinfoLogger':
    """
    Get the current logger instance.

    Returns:
        The active HwinfoLogger, or a default console-only logger if none
        was installed.
    """
    global _hwinfo_logger
    if _hwinfo_logger is None:
        # Create a default console-only logger
        _hwinfo_logger = HwinfoLogger(install=False)
    return _hwinfo_logger


def set_logger(logger: Optional['HwinfoLogger']):
    """Set (or clear, with None) the module-level logger."""
    global _hwinfo_logger
    _hwinfo_logger = logger


@dataclass
class LogConfig:
    """Configuration for hwinfo logging."""

    # Log level for console output
    console_level: int = logging.INFO

    # Log level for file output
    file_level: int = logging.DEBUG

    # Optional log file; None logs to console only
    log_file: Optional[Path] = None

    # Whether to include timestamps in file output
    file_timestamps: bool = True

    # Width for section separators
    separator_width: int = 60


class HwinfoLogger:
    """
    Logger writing human-readable lines to stdout/stderr and an optional file.

    Informational output goes to stdout, warnings and errors to stderr.
    Debug output is written to the console only when console_level is DEBUG,
    and to the log file when file_level allows it.
    """

    def __init__(
        self,
        config: Optional[LogConfig] = None,
        stream: Optional[TextIO] = None,
        err_stream: Optional[TextIO] = None,
        install: bool = True,
    ):
        """
        Initialize the logger.

        Args:
            config: Optional LogConfig
            stream: Stream for info/debug output (default: sys.stdout at write time)
            err_stream: Stream for warnings/errors (default: sys.stderr at write time)
            install: Register this instance as the module-level logger
        """
        self.config = config or LogConfig()
        self._stream = stream
        self._err_stream = err_stream
        self._log_file: Optional[TextIO] = None

        if self.config.log_file is not None:
            self._setup_file_logging()

        if install:
            set_logger(self)

    def _setup_file_logging(self):
        """Open the log file for appending."""
        path = Path(self.config.log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        self._log_file = open(path, 'a')

    @property
    def log_path(self) -> Optional[Path]:
        """Get the path to the log file, if any."""
        return Path(self.config.log_file) if self.config.log_file is not None else None

    def _write(self, message: str, level: int):
        if level >= self.config.console_level:
            if level >= logging.WARNING:
                out = self._err_stream or sys.stderr
            else:
                out = self._stream or sys.stdout
            print(message, file=out)

        if self._log_file and level >= self.config.file_level:
            timestamp = ""
            if self.config.file_timestamps:
                timestamp = f"[{datetime.now().strftime('%H:%M:%S.%f')[:-3]}] "
            self._log_file.write(f"{timestamp}{logging.getLevelName(level)}: {message}\n")
            self._log_file.flush()

    def debug(self, message: str):
        """Log a debug message."""
        self._write(message, logging.DEBUG)

    def info(self, message: str):
        """Log an informational message."""
        self._write(message, logging.INFO)

    def warning(self, message: str):
        """Log a warning message."""
        self._write(f"WARNING: {message}", logging.WARNING)

    def error(self, message: str):
        """Log an error message."""
        self._write(f"ERROR: {message}", logging.ERROR)

    def section(self, title: str):
        """Print a section header."""
        self._write("", logging.INFO)
        self._write(title, logging.INFO)
        self._write("-" * self.config.separator_width, logging.INFO)

    def blank(self):
        """Print a blank line."""
        self._write("", logging.INFO)

    def close(self):
        """Close the log file and uninstall this logger if it is the active one."""
        if self._log_file:
            self._log_file.close()
            self._log_file = None
        if _hwinfo_logger is self:
            set_logger(None)

    def __enter__(self) -> 'HwinfoLogger':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
