"""Utility functions and classes."""

from .logging_config import get_logger, LogLevel, LoggingConfig, setup_application_logging
from .error_handler import (
    ErrorHandler, ErrorCategory, ErrorSeverity, CinemaError, RepositoryError,
    FrontMatterError, NormalizationError, ConfigurationError, RenderError
)
from .http_client import HttpClient

__all__ = [
    'get_logger',
    'LogLevel',
    'LoggingConfig',
    'setup_application_logging',
    'ErrorHandler',
    'ErrorCategory',
    'ErrorSeverity',
    'CinemaError',
    'RepositoryError',
    'FrontMatterError',
    'NormalizationError',
    'ConfigurationError',
    'RenderError',
    'HttpClient',
]
