"""
Custom exception hierarchy and error utilities.

Defines every application exception and helpers that render them
consistently for callers and logs.
"""

import logging
import traceback
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional, Union

logger = logging.getLogger(__name__)


class ErrorCode(Enum):
    """
    Standardized error codes.
    """

    # General
    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Infrastructure
    DATABASE_CONNECTION_FAILED = "DATABASE_CONNECTION_FAILED"

    # Missing entities
    ORDER_NOT_FOUND = "ORDER_NOT_FOUND"
    PRODUCT_NOT_FOUND = "PRODUCT_NOT_FOUND"

    # Business rules
    ORDER_ALREADY_SHIPPED = "ORDER_ALREADY_SHIPPED"
    NON_POSITIVE_QUANTITY = "NON_POSITIVE_QUANTITY"
    INSUFFICIENT_STOCK = "INSUFFICIENT_STOCK"


class ErrorSeverity(Enum):
    """
    Error severity levels.
    """

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class AppException(Exception):
    """
    Base class for all application exceptions.
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.UNKNOWN_ERROR,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 500,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        is_retryable: bool = False,
    ):
        """
        Initialize the exception.

        Args:
            message: Human-readable error message
            error_code: Standardized error code
            details: Additional error information
            status_code: Associated HTTP status code
            severity: Error severity
            is_retryable: Whether the operation may be retried
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.status_code = status_code
        self.severity = severity
        self.is_retryable = is_retryable
        self.timestamp = datetime.now(timezone.utc)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the exception to a dictionary.

        Returns:
            Dict: Serializable representation
        """
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code.value,
            "details": self.details,
            "status_code": self.status_code,
            "severity": self.severity.value,
            "is_retryable": self.is_retryable,
            "timestamp": self.timestamp.isoformat(),
        }

    def __str__(self) -> str:
        return f"{self.error_code.value}: {self.message}"


class NotFoundException(AppException):
    """
    Raised when a referenced order or product does not exist.
    """

    ENTITY_CODES = {
        "order": ErrorCode.ORDER_NOT_FOUND,
        "product": ErrorCode.PRODUCT_NOT_FOUND,
    }

    def __init__(self, entity: str, key: Any, message: Optional[str] = None, **kwargs):
        """
        Initialize the exception.

        Args:
            entity: Missing entity name ("order" or "product")
            key: Key that was looked up
            message: Optional custom message
            **kwargs: Extra arguments for AppException
        """
        super().__init__(
            message=message or f"{entity.capitalize()} {key} does not exist",
            error_code=self.ENTITY_CODES.get(entity, ErrorCode.UNKNOWN_ERROR),
            status_code=404,
            severity=ErrorSeverity.LOW,
            **kwargs,
        )
        self.entity = entity
        self.key = key

        self.details.update({"entity": entity, "key": key})


class BusinessRuleException(AppException):
    """
    Raised when a request breaks a business rule (shipped order,
    non-positive quantity, insufficient stock).
    """

    # Non-positive quantity is malformed input; the other rules are state conflicts
    REASON_STATUS = {
        ErrorCode.ORDER_ALREADY_SHIPPED: 409,
        ErrorCode.NON_POSITIVE_QUANTITY: 422,
        ErrorCode.INSUFFICIENT_STOCK: 409,
    }

    def __init__(self, message: str, reason: ErrorCode, **kwargs):
        """
        Initialize the exception.

        Args:
            message: Human-readable error message
            reason: Machine-readable reason code
            **kwargs: Extra arguments for AppException
        """
        super().__init__(
            message=message,
            error_code=reason,
            status_code=self.REASON_STATUS.get(reason, 409),
            severity=ErrorSeverity.LOW,
            **kwargs,
        )
        self.reason = reason

        self.details.update({"reason": reason.value})


class ValidationException(AppException):
    """
    Raised for malformed input data.
    """

    def __init__(
        self,
        message: str,
        field: str,
        invalid_value: Any = None,
        expected_format: Optional[str] = None,
        **kwargs,
    ):
        """
        Initialize the validation exception.

        Args:
            message: Error message
            field: Field that failed validation
            invalid_value: Offending value
            expected_format: Expected format
            **kwargs: Extra arguments for AppException
        """
        super().__init__(
            message=message,
            error_code=ErrorCode.VALIDATION_ERROR,
            status_code=422,
            severity=ErrorSeverity.LOW,
            **kwargs,
        )
        self.field = field
        self.invalid_value = invalid_value
        self.expected_format = expected_format

        self.details.update(
            {
                "field": field,
                "invalid_value": str(invalid_value) if invalid_value is not None else None,
                "expected_format": expected_format,
            }
        )


class DatabaseConnectionException(AppException):
    """
    Raised for database connection and query failures.
    """

    def __init__(
        self,
        message: str,
        db_host: Optional[str] = None,
        connection_type: str = "database",
        **kwargs,
    ):
        """
        Initialize the database exception.

        Args:
            message: Error message
            db_host: Database host
            connection_type: Step that failed
            **kwargs: Extra arguments for AppException
        """
        super().__init__(
            message=message,
            error_code=ErrorCode.DATABASE_CONNECTION_FAILED,
            status_code=503,
            severity=ErrorSeverity.HIGH,
            is_retryable=True,
            **kwargs,
        )
        self.db_host = db_host
        self.connection_type = connection_type

        self.details.update({"db_host": db_host, "connection_type": connection_type})


# === UTILITY FUNCTIONS ===


def create_error_response(
    exception: Union[AppException, Exception], include_traceback: bool = False
) -> Dict[str, Any]:
    """
    Build the standard error payload.

    Args:
        exception: Exception to render
        include_traceback: Whether to include the formatted traceback

    Returns:
        Dict: Error response
    """
    if isinstance(exception, AppException):
        error_dict = exception.to_dict()
    else:
        error_dict = AppException(
            message=f"{type(exception).__name__}: {exception}",
            details={"original_exception": type(exception).__name__},
        ).to_dict()

    if include_traceback:
        error_dict["traceback"] = "".join(
            traceback.format_exception(type(exception), exception, exception.__traceback__)
        )

    return {"error": True, **error_dict}


def log_error(
    exception: Exception,
    context: Optional[Dict[str, Any]] = None,
    level: int = logging.ERROR,
) -> None:
    """
    Log an exception consistently.

    Args:
        exception: Exception to log
        context: Additional context
        level: Logging level
    """
    context = context or {}

    log_data = {
        "exception_type": type(exception).__name__,
        "exception_message": str(exception),
        **context,
    }

    if isinstance(exception, AppException):
        message = f"{exception.error_code.value}: {exception.message}"
        log_data.update(
            {
                "error_code": exception.error_code.value,
                "severity": exception.severity.value,
                "is_retryable": exception.is_retryable,
            }
        )
    else:
        message = f"Unhandled exception: {type(exception).__name__}: {exception}"

    logger.log(level, message, extra=log_data)
