"""Error taxonomy and bookkeeping for request-scoped failures.

Nothing in a request is fatal: a failed directory listing becomes an empty
result, a malformed file is skipped, and a rendering failure becomes the
generic error page. ``ErrorHandler`` records each of those degradations so
they stay visible in logs and in the health endpoint.
"""

import hashlib
import logging
from collections import deque
from typing import Optional, Dict, Any, List
from datetime import datetime
from enum import Enum
from dataclasses import dataclass, field

from .logging_config import get_logger


class CinemaError(Exception):
    """Base exception for Rwanda Cinema errors."""
    pass


class RepositoryError(CinemaError):
    """Raised when the remote content repository cannot be read."""
    pass


class FrontMatterError(CinemaError):
    """Raised when a front-matter block cannot be parsed."""
    pass


class NormalizationError(CinemaError):
    """Raised when a content file cannot be turned into a video record."""
    pass


class ConfigurationError(CinemaError):
    """Raised for configuration-related errors."""
    pass


class RenderError(CinemaError):
    """Raised when a page or sitemap cannot be rendered."""
    pass


class ErrorSeverity(Enum):
    """Error severity levels."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorCategory(Enum):
    """Error categories for classification."""
    NETWORK = "network"
    PARSING = "parsing"
    VALIDATION = "validation"
    CONFIGURATION = "configuration"
    RENDERING = "rendering"
    UNKNOWN = "unknown"


@dataclass
class ErrorInfo:
    """Information about an error occurrence."""
    error_id: str
    timestamp: datetime
    exception: Exception
    category: ErrorCategory
    severity: ErrorSeverity
    context: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error info to dictionary."""
        return {
            'error_id': self.error_id,
            'timestamp': self.timestamp.isoformat(),
            'exception_type': type(self.exception).__name__,
            'exception_message': str(self.exception),
            'category': self.category.value,
            'severity': self.severity.value,
            'context': self.context,
        }


# Exception type -> category, checked with isinstance before name heuristics.
_CATEGORY_BY_TYPE = (
    (RepositoryError, ErrorCategory.NETWORK),
    (FrontMatterError, ErrorCategory.PARSING),
    (NormalizationError, ErrorCategory.VALIDATION),
    (ConfigurationError, ErrorCategory.CONFIGURATION),
    (RenderError, ErrorCategory.RENDERING),
)


class ErrorHandler:
    """
    Central error classification and history.

    The handler never re-raises: callers decide how to degrade and hand the
    exception over for logging and statistics.
    """

    def __init__(
        self,
        max_error_history: int = 500,
        error_reporting_enabled: bool = True
    ):
        """
        Initialize error handler.

        Args:
            max_error_history: Maximum number of errors to keep in history
            error_reporting_enabled: Enable error logging
        """
        self.max_error_history = max_error_history
        self.error_reporting_enabled = error_reporting_enabled

        self.logger = get_logger(__name__)

        self.error_history: deque = deque(maxlen=max_error_history)
        self.error_counts: Dict[str, int] = {}
        self.category_counts: Dict[str, int] = {}
        self.stats = {'total_errors': 0}

    def handle_error(
        self,
        exception: Exception,
        context: Optional[Dict[str, Any]] = None,
        category: Optional[ErrorCategory] = None,
        severity: Optional[ErrorSeverity] = None
    ) -> ErrorInfo:
        """
        Classify, log and record an error.

        Args:
            exception: The exception that occurred
            context: Additional context information (file name, directory, ...)
            category: Error category (auto-detected if None)
            severity: Error severity (auto-detected if None)

        Returns:
            ErrorInfo object with error details
        """
        if category is None:
            category = self._classify_error(exception)

        if severity is None:
            severity = self._assess_severity(exception, category)

        error_info = ErrorInfo(
            error_id=self._generate_error_id(exception),
            timestamp=datetime.now(),
            exception=exception,
            category=category,
            severity=severity,
            context=context or {}
        )

        self.stats['total_errors'] += 1
        type_name = type(exception).__name__
        self.error_counts[type_name] = self.error_counts.get(type_name, 0) + 1
        self.category_counts[category.value] = self.category_counts.get(category.value, 0) + 1

        if self.error_reporting_enabled:
            self._log_error(error_info)

        self.error_history.append(error_info)

        return error_info

    def _generate_error_id(self, exception: Exception) -> str:
        """Generate unique error ID."""
        error_string = f"{type(exception).__name__}:{exception}:{datetime.now().isoformat()}"
        return hashlib.md5(error_string.encode()).hexdigest()[:8]

    def _classify_error(self, exception: Exception) -> ErrorCategory:
        """Classify error into category based on exception type."""
        for exception_type, category in _CATEGORY_BY_TYPE:
            if isinstance(exception, exception_type):
                return category

        name = type(exception).__name__.lower()

        if any(token in name for token in
               ['connection', 'timeout', 'http', 'client', 'socket', 'network']):
            return ErrorCategory.NETWORK

        if any(token in name for token in ['parse', 'json', 'yaml', 'decode', 'unicode']):
            return ErrorCategory.PARSING

        if any(token in name for token in ['template', 'undefined']):
            return ErrorCategory.RENDERING

        if any(token in name for token in ['value', 'type', 'key', 'attribute', 'index']):
            return ErrorCategory.VALIDATION

        return ErrorCategory.UNKNOWN

    def _assess_severity(self, exception: Exception, category: ErrorCategory) -> ErrorSeverity:
        """Assess error severity based on exception and category."""
        if category in (ErrorCategory.CONFIGURATION, ErrorCategory.RENDERING):
            return ErrorSeverity.HIGH

        if category == ErrorCategory.NETWORK:
            return ErrorSeverity.MEDIUM

        if category == ErrorCategory.UNKNOWN:
            return ErrorSeverity.MEDIUM

        # parsing and validation problems only cost a single file
        return ErrorSeverity.LOW

    def _log_error(self, error_info: ErrorInfo) -> None:
        """Log error information."""
        log_level = {
            ErrorSeverity.LOW: logging.WARNING,
            ErrorSeverity.MEDIUM: logging.WARNING,
            ErrorSeverity.HIGH: logging.ERROR,
            ErrorSeverity.CRITICAL: logging.CRITICAL
        }.get(error_info.severity, logging.ERROR)

        self.logger.log(
            log_level,
            f"Error {error_info.error_id}: {error_info.exception}",
            extra={
                'error_id': error_info.error_id,
                'category': error_info.category.value,
                'severity': error_info.severity.value,
                'context': error_info.context,
                'exception_type': type(error_info.exception).__name__,
            }
        )

    def get_recent_errors(self, limit: int = 20) -> List[ErrorInfo]:
        """Most recent errors, newest last."""
        return list(self.error_history)[-limit:]

    def get_statistics(self) -> Dict[str, Any]:
        """Counters suitable for a health report."""
        return {
            'total_errors': self.stats['total_errors'],
            'error_counts_by_type': dict(self.error_counts),
            'error_counts_by_category': dict(self.category_counts),
            'error_history_size': len(self.error_history),
        }
