"""
Base service class for SwampDoge Sync services.

This module provides the timeout race shared by every remote fetch, in two
flavours: one that degrades to a fallback value and never raises (used for
prices), and one that raises a typed error (used for balances and holders).
"""

import asyncio
import logging
import time
from functools import wraps
from typing import Any, Awaitable, Callable, Optional, Type, TypeVar

from swampdoge_sync.constants import FETCH_TIMEOUT_MS
from swampdoge_sync.utils.errors import RpcError, RpcTimeoutError, SwampSyncError

T = TypeVar('T')

# Configure logger
logger = logging.getLogger(__name__)


def handle_errors(error_type: Type[RpcError] = RpcError):
    """
    Decorator to handle errors in service methods.

    Errors that are already SwampSyncError pass through unchanged; anything
    else is wrapped in ``error_type`` carrying the original message.

    Args:
        error_type: The type of error to raise if an exception occurs

    Returns:
        Decorated function
    """
    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        @wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return await func(*args, **kwargs)
            except SwampSyncError as e:
                logger.error(f"Error in {func.__name__}: {e.message}")
                raise
            except Exception as e:
                logger.error(f"Error in {func.__name__}: {str(e)}")
                raise error_type(str(e) or type(e).__name__) from e
        return wrapper
    return decorator


class BaseService:
    """
    Base service class with common functionality.

    This class provides:
    - Timeout races for remote fetches
    - Logging
    - Timing of refresh cycles
    """

    def __init__(self, timeout_ms: float = FETCH_TIMEOUT_MS, logger: Optional[logging.Logger] = None):
        """
        Initialize the base service.

        Args:
            timeout_ms: Default timeout for remote fetches in milliseconds
            logger: Optional logger instance
        """
        self.timeout_ms = timeout_ms
        self.logger = logger or logging.getLogger(self.__class__.__name__)

    async def fetch_with_timeout(
        self,
        operation: Awaitable[T],
        timeout_ms: Optional[float] = None,
        fallback_value: Optional[T] = None,
        operation_name: str = "fetch"
    ) -> Optional[T]:
        """
        Race ``operation`` against a timer, degrading every failure to a fallback.

        If the timer fires first the operation is cancelled and its result is
        never seen. Transport errors, malformed payloads and remote error
        payloads are caught as well. Only cancellation of the caller itself
        propagates.

        Args:
            operation: The awaitable to run
            timeout_ms: Optional custom timeout in milliseconds
            fallback_value: Value returned on timeout or failure (Unavailable)
            operation_name: Name used in log messages

        Returns:
            The operation's result, or ``fallback_value``
        """
        timeout_value = self.timeout_ms if timeout_ms is None else timeout_ms
        try:
            return await asyncio.wait_for(operation, timeout=timeout_value / 1000)
        except asyncio.TimeoutError:
            self.logger.warning(f"{operation_name} timed out after {timeout_value:.0f}ms")
            return fallback_value
        except asyncio.CancelledError:
            raise
        except Exception as e:
            self.logger.warning(f"{operation_name} unavailable: {str(e) or type(e).__name__}")
            return fallback_value

    async def with_timeout(
        self,
        operation: Awaitable[T],
        timeout_ms: Optional[float] = None,
        operation_name: str = "operation"
    ) -> T:
        """
        Run ``operation`` with a timeout.

        Args:
            operation: The awaitable to run
            timeout_ms: Optional custom timeout in milliseconds
            operation_name: Name used in the error message

        Returns:
            The result of the operation

        Raises:
            RpcTimeoutError: If the operation times out
        """
        timeout_value = self.timeout_ms if timeout_ms is None else timeout_ms
        try:
            return await asyncio.wait_for(operation, timeout=timeout_value / 1000)
        except asyncio.TimeoutError:
            raise RpcTimeoutError(
                f"{operation_name} timed out after {timeout_value / 1000:g}s",
                timeout=timeout_value / 1000
            )

    def log_timing(self, operation_name: str) -> "TimingContextManager":
        """
        Create a context manager to log timing information.

        Args:
            operation_name: Name of the operation

        Returns:
            Timing context manager
        """
        return TimingContextManager(operation_name, self.logger)


class TimingContextManager:
    """Async context manager that logs how long an operation took."""

    def __init__(self, operation_name: str, logger: logging.Logger):
        self.operation_name = operation_name
        self.logger = logger
        self.start_time = 0.0

    async def __aenter__(self) -> "TimingContextManager":
        self.start_time = time.monotonic()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        elapsed = time.monotonic() - self.start_time
        if exc_val is not None:
            self.logger.error(
                f"{self.operation_name} failed after {elapsed:.2f}s: {str(exc_val)}"
            )
        else:
            self.logger.debug(f"{self.operation_name} completed in {elapsed:.2f}s")
