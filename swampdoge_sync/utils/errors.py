"""
Error types for SwampDoge Sync.

This module defines the exception hierarchy shared by the clients, services
and the engine. Every error carries a machine-readable code and a details
dict so that a presentation layer can render it without parsing messages.
"""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(str, Enum):
    """Error codes for SwampDoge Sync."""

    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    RATE_LIMITED = "RATE_LIMITED"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"

    # Chain RPC errors
    RPC_ERROR = "RPC_ERROR"
    RPC_TIMEOUT = "RPC_TIMEOUT"

    # Market/price endpoints
    EXTERNAL_SERVICE_ERROR = "EXTERNAL_SERVICE_ERROR"
    DATA_PARSING_ERROR = "DATA_PARSING_ERROR"


class SwampSyncError(Exception):
    """Base exception for all SwampDoge Sync errors."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.UNKNOWN_ERROR,
        details: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize a new error.

        Args:
            message: Error message
            code: Error code
            details: Additional error details
        """
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the error to a dictionary.

        Returns:
            Dictionary representation of the error
        """
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details
        }


class ValidationError(SwampSyncError):
    """Exception for validation errors."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        error_details = details or {}
        if field:
            error_details["field"] = field

        super().__init__(
            message=message,
            code=ErrorCode.VALIDATION_ERROR,
            details=error_details
        )


class ConfigurationError(SwampSyncError):
    """Exception for invalid configuration."""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            code=ErrorCode.CONFIGURATION_ERROR,
            details=details
        )


class RateLimitedError(SwampSyncError):
    """Exception for a refresh rejected by the cooldown gate."""

    def __init__(
        self,
        refresh_class: str,
        retry_after_ms: float
    ):
        super().__init__(
            message=f"{refresh_class} refresh is cooling down",
            code=ErrorCode.RATE_LIMITED,
            details={
                "refresh_class": refresh_class,
                "retry_after_ms": max(0.0, retry_after_ms)
            }
        )


class RpcError(SwampSyncError):
    """Exception for chain RPC errors."""

    def __init__(
        self,
        message: str,
        rpc_error: Optional[Dict[str, Any]] = None,
        code: ErrorCode = ErrorCode.RPC_ERROR
    ):
        super().__init__(
            message=message,
            code=code,
            details={"rpc_error": rpc_error or {}}
        )


class RpcTimeoutError(RpcError):
    """Exception for chain RPC timeout errors."""

    def __init__(
        self,
        message: str,
        timeout: float,
        rpc_error: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            rpc_error=rpc_error,
            code=ErrorCode.RPC_TIMEOUT
        )
        self.details["timeout"] = timeout


class ExternalServiceError(SwampSyncError):
    """Exception for errors from market or price endpoints."""

    def __init__(
        self,
        message: str,
        service_name: str,
        details: Optional[Dict[str, Any]] = None
    ):
        error_details = details or {}
        error_details["service_name"] = service_name

        super().__init__(
            message=message,
            code=ErrorCode.EXTERNAL_SERVICE_ERROR,
            details=error_details
        )


class DataParsingError(SwampSyncError):
    """Exception for malformed payloads."""

    def __init__(
        self,
        message: str,
        data_type: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        error_details = details or {}
        if data_type:
            error_details["data_type"] = data_type

        super().__init__(
            message=message,
            code=ErrorCode.DATA_PARSING_ERROR,
            details=error_details
        )
