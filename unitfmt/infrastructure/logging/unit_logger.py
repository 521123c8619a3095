"""
Buffered File Logging

Thread-safe buffered logger writing timestamped lines to a log file, with a
bridge that routes the standard ``logging`` tree into it.
"""

import os
import logging
import threading
import time
from datetime import datetime
from pathlib import Path
from io import StringIO
from typing import Optional, Dict, Any

# Library loggers raised to DEBUG in verbose mode
LIBRARY_LOGGERS = ['unitfmt', 'QuantityConverter']


class UnitsLogger:
    """
    Buffered, thread-safe file logger

    Messages are buffered in memory and appended to the log file when the
    buffer holds `buffer_size` messages, when `flush_interval` seconds have
    passed since the last flush, or on an explicit ``flush``.
    """

    def __init__(self, log_file: str = "unitfmt.log",
                 overwrite: bool = False, buffer_size: int = 1000,
                 flush_interval: float = 10.0):
        """
        Initialize logger

        Args:
            log_file: Path to log file
            overwrite: Whether to overwrite existing log file
            buffer_size: Number of buffered messages before auto-flush
            flush_interval: Time interval for auto-flush (seconds)
        """

        # File setup
        self.log_file_path = Path(log_file)
        self.log_file_path.parent.mkdir(parents=True, exist_ok=True)

        # Buffer setup
        self.buffer = StringIO()
        self.buffer_size = buffer_size
        self.buffer_count = 0
        self.flush_interval = flush_interval
        self.last_flush_time = time.time()

        # Thread safety
        self._lock = threading.Lock()

        # Statistics
        self.stats = {
            'messages_logged': 0,
            'bytes_written': 0,
            'flush_count': 0,
            'errors': 0
        }

        self.handler: Optional[logging.Handler] = None

        self._initialize_log_file(overwrite)
        self._setup_python_logging()

    def _initialize_log_file(self, overwrite: bool):
        """Initialize log file with header"""

        if overwrite and self.log_file_path.exists():
            self.log_file_path.unlink()

        header_lines = [
            "===== unitfmt Log =====",
            f"Started: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}",
            f"Process: {os.getpid()}",
            f"Log File: {self.log_file_path}",
            "=" * 50
        ]

        with open(self.log_file_path, 'a', encoding='utf-8') as f:
            for line in header_lines:
                f.write(f"{line}\n")

    def log(self, message: str, level: str = "INFO", category: str = None):
        """
        Log message with timestamp

        Args:
            message: Message to log
            level: Log level (INFO, WARNING, ERROR, DEBUG)
            category: Optional category for message
        """

        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]

        category_str = f"[{category}] " if category else ""
        formatted_msg = f"{timestamp} {level:7s} - {category_str}{message}"

        with self._lock:
            self.buffer.write(f"{formatted_msg}\n")
            self.buffer_count += 1
            self.stats['messages_logged'] += 1

            current_time = time.time()
            if (self.buffer_count >= self.buffer_size or
                    current_time - self.last_flush_time >= self.flush_interval):
                self._flush_buffer()

    def info(self, message: str, category: str = None):
        """Log info message"""
        self.log(message, "INFO", category)

    def warning(self, message: str, category: str = None):
        """Log warning message"""
        self.log(message, "WARNING", category)

    def error(self, message: str, category: str = None):
        """Log error message"""
        self.log(message, "ERROR", category)
        self.stats['errors'] += 1

    def debug(self, message: str, category: str = None):
        """Log debug message"""
        self.log(message, "DEBUG", category)

    def flush(self):
        """Force flush buffer to file"""
        with self._lock:
            self._flush_buffer()

    def _flush_buffer(self):
        """Internal buffer flush; caller holds the lock"""

        if self.buffer_count == 0:
            return

        buffer_content = self.buffer.getvalue()

        try:
            with open(self.log_file_path, 'a', encoding='utf-8') as f:
                f.write(buffer_content)
                f.flush()
                os.fsync(f.fileno())

            self.stats['bytes_written'] += len(buffer_content)
            self.stats['flush_count'] += 1

        except OSError as e:
            print(f"Failed to flush log buffer: {e}")
            self.stats['errors'] += 1
        finally:
            self.buffer.truncate(0)
            self.buffer.seek(0)
            self.buffer_count = 0
            self.last_flush_time = time.time()

    def _setup_python_logging(self):
        """Route the root logger into this logger"""

        self.handler = UnitsLogHandler(self)
        self.handler.setLevel(logging.DEBUG)
        self.handler.setFormatter(logging.Formatter('%(name)s - %(message)s'))

        root_logger = logging.getLogger()
        root_logger.addHandler(self.handler)
        root_logger.setLevel(logging.INFO)

        for name in LIBRARY_LOGGERS:
            logging.getLogger(name).setLevel(logging.INFO)

    def get_statistics(self) -> Dict[str, Any]:
        """Get logging statistics"""
        stats = self.stats.copy()
        stats.update({
            'buffer_size': self.buffer_count,
            'log_file_size': self.log_file_path.stat().st_size if self.log_file_path.exists() else 0,
        })
        return stats

    def finalize(self):
        """Flush, write footer and detach from the logging tree"""
        self.flush()

        if self.handler is not None:
            logging.getLogger().removeHandler(self.handler)
            self.handler = None

        footer_lines = [
            "=" * 50,
            f"Completed: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}",
            f"Total messages logged: {self.stats['messages_logged']}",
            "===== End of Log ====="
        ]

        with open(self.log_file_path, 'a', encoding='utf-8') as f:
            for line in footer_lines:
                f.write(f"{line}\n")


class UnitsLogHandler(logging.Handler):
    """Logging handler forwarding records to a UnitsLogger"""

    def __init__(self, units_logger: UnitsLogger):
        super().__init__()
        self.units_logger = units_logger

    def emit(self, record):
        try:
            self.units_logger.log(self.format(record), record.levelname)
        except Exception:
            self.handleError(record)


# Global logger instance
_global_logger: Optional[UnitsLogger] = None


def setup_logging(log_file: str = "unitfmt.log",
                  overwrite: bool = False,
                  verbose: bool = False) -> UnitsLogger:
    """
    Setup global file logging

    Args:
        log_file: Path to log file
        overwrite: Whether to overwrite existing log
        verbose: Enable debug-level logging

    Returns:
        UnitsLogger instance
    """
    global _global_logger

    if _global_logger is None:
        _global_logger = UnitsLogger(log_file, overwrite)

    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)
        for name in LIBRARY_LOGGERS:
            logging.getLogger(name).setLevel(logging.DEBUG)

    return _global_logger


def get_logger() -> UnitsLogger:
    """Get global logger instance"""
    if _global_logger is None:
        setup_logging()

    return _global_logger


def shutdown_logging():
    """Finalize and drop the global logger"""
    global _global_logger

    if _global_logger is not None:
        _global_logger.finalize()
        _global_logger = None
