"""Error classification, logging and reporting."""

import json
import logging
import time
import traceback
from dataclasses import dataclass, asdict
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from .sequence import InvalidSequenceError


class ErrorType(Enum):
    """Types of errors that can occur."""
    INVALID_SEQUENCE = "invalid_sequence"
    FILE_NOT_FOUND = "file_not_found"
    FILE_IO_ERROR = "file_io_error"
    CONFIG_ERROR = "config_error"
    UNKNOWN = "unknown"


class ErrorSeverity(Enum):
    """Severity levels for errors."""
    ERROR = "error"
    CRITICAL = "critical"


@dataclass
class ErrorContext:
    """Context information for an error."""
    error_type: ErrorType
    severity: ErrorSeverity
    message: str
    timestamp: float
    operation: str
    item_id: Optional[str] = None
    details: Optional[Dict[str, Any]] = None
    exception: Optional[Exception] = None
    traceback: Optional[str] = None
    suggestion: Optional[str] = None


class ErrorHandler:
    """Classifies and logs errors and keeps a history for reporting."""

    SUGGESTIONS = {
        ErrorType.INVALID_SEQUENCE: "Check the sequence; only A, T, G and C are allowed.",
        ErrorType.FILE_NOT_FOUND: "Check the file path and try again.",
        ErrorType.FILE_IO_ERROR: "Check file permissions and encoding.",
        ErrorType.CONFIG_ERROR: "Fix the configuration file or regenerate it with --generate-config.",
        ErrorType.UNKNOWN: None,
    }

    def __init__(self):
        self.logger = logging.getLogger(__name__)
        self.error_history: List[ErrorContext] = []

    def handle_error(self,
                     error: Exception,
                     operation: str,
                     item_id: Optional[str] = None,
                     error_type: Optional[ErrorType] = None,
                     **kwargs) -> ErrorContext:
        """
        Handle an error with appropriate logging.

        Args:
            error: The exception that occurred
            operation: The operation being performed
            item_id: Optional item identifier, e.g. an input path
            error_type: Override for the classified error type
            **kwargs: Additional context data

        Returns:
            ErrorContext with error details and suggestions
        """
        error_type = error_type or self._classify_error(error)
        severity = self._determine_severity(error_type)

        details = dict(kwargs)
        if isinstance(error, InvalidSequenceError) and error.position is not None:
            details.setdefault('character', error.character)
            details.setdefault('position', error.position)

        context = ErrorContext(
            error_type=error_type,
            severity=severity,
            message=str(error),
            timestamp=time.time(),
            operation=operation,
            item_id=item_id,
            details=details,
            exception=error,
            traceback=traceback.format_exc() if severity == ErrorSeverity.CRITICAL else None,
            suggestion=self.SUGGESTIONS.get(error_type)
        )

        self._log_error(context)
        self.error_history.append(context)

        return context

    def _classify_error(self, error: Exception) -> ErrorType:
        """Classify the error type based on exception."""
        if isinstance(error, InvalidSequenceError):
            return ErrorType.INVALID_SEQUENCE

        if isinstance(error, FileNotFoundError):
            return ErrorType.FILE_NOT_FOUND

        if isinstance(error, OSError):
            return ErrorType.FILE_IO_ERROR

        if 'configuration' in str(error).lower():
            return ErrorType.CONFIG_ERROR

        return ErrorType.UNKNOWN

    def _determine_severity(self, error_type: ErrorType) -> ErrorSeverity:
        """User input problems are errors, anything unexpected is critical."""
        if error_type == ErrorType.UNKNOWN:
            return ErrorSeverity.CRITICAL
        return ErrorSeverity.ERROR

    def _log_error(self, context: ErrorContext):
        """Log error with appropriate level and details."""
        log_message = f"{context.operation} - {context.error_type.value}: {context.message}"

        if context.item_id:
            log_message += f" (item: {context.item_id})"

        if context.severity == ErrorSeverity.CRITICAL:
            self.logger.critical(log_message)
            if context.traceback:
                self.logger.critical(f"Traceback:\n{context.traceback}")
        else:
            self.logger.error(log_message)

        if context.suggestion:
            self.logger.debug(f"Suggestion: {context.suggestion}")

    def get_error_summary(self) -> Dict[str, Any]:
        """Get summary of errors for reporting."""
        by_type: Dict[str, int] = {}
        by_severity: Dict[str, int] = {}
        for error in self.error_history:
            by_type[error.error_type.value] = by_type.get(error.error_type.value, 0) + 1
            by_severity[error.severity.value] = by_severity.get(error.severity.value, 0) + 1

        recent_errors = []
        for error in self.error_history[-5:]:
            recent_errors.append({
                'type': error.error_type.value,
                'severity': error.severity.value,
                'message': error.message,
                'operation': error.operation,
                'timestamp': datetime.fromtimestamp(error.timestamp).isoformat(),
                'suggestion': error.suggestion
            })

        return {
            'total_errors': len(self.error_history),
            'by_type': by_type,
            'by_severity': by_severity,
            'recent_errors': recent_errors
        }

    def export_error_report(self, output_file: str) -> None:
        """Export detailed error report as JSON.

        Raises:
            OSError: If the report cannot be written
        """
        report = {
            'generated_at': datetime.now().isoformat(),
            'summary': self.get_error_summary(),
            'detailed_errors': []
        }

        for error in self.error_history:
            error_dict = asdict(error)
            # Exception objects are not serializable
            error_dict.pop('exception', None)
            error_dict['error_type'] = error.error_type.value
            error_dict['severity'] = error.severity.value
            error_dict['timestamp'] = datetime.fromtimestamp(error.timestamp).isoformat()

            report['detailed_errors'].append(error_dict)

        with open(output_file, 'w') as f:
            json.dump(report, f, indent=2, default=str)

        self.logger.info(f"Error report exported to {output_file}")

