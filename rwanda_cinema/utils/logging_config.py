"""Unified logging configuration for the application."""

import json
import sys
import logging
import logging.handlers
from pathlib import Path
from typing import Optional
from datetime import datetime
from enum import Enum

import colorlog


class LogLevel(Enum):
    """Supported log levels."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


# Attributes every LogRecord carries; anything else came in through ``extra``.
_RESERVED_RECORD_KEYS = {
    'name', 'msg', 'args', 'levelname', 'levelno', 'pathname', 'filename',
    'module', 'lineno', 'funcName', 'created', 'msecs', 'relativeCreated',
    'thread', 'threadName', 'processName', 'process', 'getMessage', 'exc_info',
    'exc_text', 'stack_info', 'taskName', 'message', 'asctime',
}


class LoggingConfig:
    """
    Centralized logging configuration manager.

    Console output goes through colorlog, file output through a rotating
    handler. Either handler can switch to single-line JSON records, which is
    what the hosting platform's log drain expects.
    """

    def __init__(
        self,
        log_level: LogLevel = LogLevel.INFO,
        log_dir: Optional[Path] = None,
        log_filename: str = "rwanda_cinema.log",
        max_file_size_mb: int = 10,
        backup_count: int = 5,
        console_logging: bool = True,
        file_logging: bool = False,
        colored_console: bool = True,
        include_caller_info: bool = False,
        json_format: bool = False
    ):
        """
        Initialize logging configuration.

        Args:
            log_level: Minimum log level to record
            log_dir: Directory for log files (None for ./logs)
            log_filename: Name of the log file
            max_file_size_mb: Maximum size of log file before rotation
            backup_count: Number of backup files to keep
            console_logging: Enable console output
            file_logging: Enable file output
            colored_console: Use colored console output
            include_caller_info: Include caller information in logs
            json_format: Use JSON format for structured logging
        """
        self.log_level = log_level
        self.log_dir = log_dir or Path.cwd() / "logs"
        self.log_filename = log_filename
        self.max_file_size_bytes = max_file_size_mb * 1024 * 1024
        self.backup_count = backup_count
        self.console_logging = console_logging
        self.file_logging = file_logging
        self.colored_console = colored_console
        self.include_caller_info = include_caller_info
        self.json_format = json_format

        # Track configured loggers to avoid duplicate configuration
        self._configured_loggers = set()

        if self.file_logging:
            self.log_dir.mkdir(parents=True, exist_ok=True)

    def setup_logging(self, logger_name: Optional[str] = None) -> logging.Logger:
        """
        Set up logging configuration.

        Args:
            logger_name: Name of the logger (None for root logger)

        Returns:
            Configured logger instance
        """
        logger = logging.getLogger(logger_name)

        if (logger_name or "root") in self._configured_loggers:
            return logger

        # Clear existing handlers to avoid duplicates
        logger.handlers.clear()
        logger.setLevel(getattr(logging, self.log_level.value))

        # Named loggers keep their own handlers; the root logger covers the rest
        if logger_name:
            logger.propagate = False

        if self.console_logging:
            logger.addHandler(self._create_console_handler())

        if self.file_logging:
            logger.addHandler(self._create_file_handler())

        self._configured_loggers.add(logger_name or "root")

        return logger

    def _create_console_handler(self) -> logging.Handler:
        """Create console logging handler."""
        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(getattr(logging, self.log_level.value))

        if self.json_format:
            formatter = self._create_json_formatter()
        elif self.colored_console:
            formatter = self._create_colored_formatter()
        else:
            formatter = self._create_standard_formatter()

        handler.setFormatter(formatter)
        return handler

    def _create_file_handler(self) -> logging.Handler:
        """Create file logging handler with rotation."""
        handler = logging.handlers.RotatingFileHandler(
            filename=self.log_dir / self.log_filename,
            maxBytes=self.max_file_size_bytes,
            backupCount=self.backup_count,
            encoding='utf-8'
        )

        handler.setLevel(getattr(logging, self.log_level.value))

        if self.json_format:
            formatter = self._create_json_formatter()
        else:
            formatter = self._create_standard_formatter()

        handler.setFormatter(formatter)
        return handler

    def _format_string(self, colored: bool = False) -> str:
        body = '%(asctime)s - %(name)s - %(levelname)s - '
        if self.include_caller_info:
            body += '%(filename)s:%(lineno)d - %(funcName)s - '
        body += '%(message)s'
        if colored:
            return f'%(log_color)s{body}%(reset)s'
        return body

    def _create_standard_formatter(self) -> logging.Formatter:
        """Create standard text formatter."""
        return logging.Formatter(
            fmt=self._format_string(),
            datefmt='%Y-%m-%d %H:%M:%S'
        )

    def _create_colored_formatter(self) -> logging.Formatter:
        """Create colored console formatter."""
        return colorlog.ColoredFormatter(
            fmt=self._format_string(colored=True),
            datefmt='%Y-%m-%d %H:%M:%S',
            log_colors={
                'DEBUG': 'cyan',
                'INFO': 'green',
                'WARNING': 'yellow',
                'ERROR': 'red',
                'CRITICAL': 'red,bg_white',
            }
        )

    def _create_json_formatter(self) -> logging.Formatter:
        """Create JSON formatter for structured logging."""
        return JsonFormatter(include_caller_info=self.include_caller_info)


class JsonFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def __init__(self, include_caller_info: bool = False):
        super().__init__()
        self.include_caller_info = include_caller_info

    def format(self, record: logging.LogRecord) -> str:
        """
        Format log record as JSON.

        Args:
            record: Log record to format

        Returns:
            JSON formatted log string
        """
        log_data = {
            'timestamp': datetime.fromtimestamp(record.created).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage()
        }

        if self.include_caller_info:
            log_data.update({
                'filename': record.filename,
                'line_number': record.lineno,
                'function': record.funcName
            })

        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        # Add extra fields from record
        for key, value in record.__dict__.items():
            if key not in _RESERVED_RECORD_KEYS:
                log_data[key] = value

        return json.dumps(log_data, ensure_ascii=False, default=str)


def setup_application_logging(
    log_level: LogLevel = LogLevel.INFO,
    log_dir: Optional[Path] = None,
    console_logging: bool = True,
    file_logging: bool = False,
    colored_console: bool = True,
    json_format: bool = False
) -> LoggingConfig:
    """
    Set up application-wide logging configuration.

    Args:
        log_level: Minimum log level
        log_dir: Directory for log files
        console_logging: Enable console output
        file_logging: Enable file output
        colored_console: Use colored console output
        json_format: Emit JSON lines instead of text

    Returns:
        Configured LoggingConfig instance
    """
    config = LoggingConfig(
        log_level=log_level,
        log_dir=log_dir,
        console_logging=console_logging,
        file_logging=file_logging,
        colored_console=colored_console,
        json_format=json_format
    )

    config.setup_logging()
    config.setup_logging('rwanda_cinema')

    return config


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance with the given name.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)
