"""Unit tests for BaseService.

This module tests the timeout races shared by every remote fetch.
"""

import pytest
import asyncio

from swampdoge_sync.services.base_service import BaseService, handle_errors
from swampdoge_sync.utils.errors import DataParsingError, RpcError, RpcTimeoutError


class TestBaseService:
    """Test suite for BaseService."""

    @pytest.fixture
    def base_service(self):
        """Create a BaseService instance for testing."""
        return BaseService(timeout_ms=50)

    @pytest.mark.asyncio
    async def test_fetch_with_timeout_success(self, base_service):
        """Test fetch_with_timeout when the coroutine succeeds."""
        # Setup
        async def success_coro():
            return 0.25

        # Execute
        result = await base_service.fetch_with_timeout(success_coro())

        # Verify
        assert result == 0.25

    @pytest.mark.asyncio
    async def test_fetch_with_timeout_failure(self, base_service):
        """Test fetch_with_timeout degrades an error to the fallback."""
        # Setup
        async def fail_coro():
            raise ValueError("Test error")

        # Execute
        result = await base_service.fetch_with_timeout(fail_coro(), operation_name="price")

        # Verify
        assert result is None

    @pytest.mark.asyncio
    async def test_fetch_with_timeout_timeout(self, base_service):
        """Test fetch_with_timeout when the coroutine times out."""
        # Setup
        finished = []

        async def slow_coro():
            await asyncio.sleep(0.5)
            finished.append(True)
            return 1.0

        # Execute
        result = await base_service.fetch_with_timeout(slow_coro(), fallback_value=-1.0)

        # Verify
        assert result == -1.0
        await asyncio.sleep(0.6)
        assert finished == []

    @pytest.mark.asyncio
    async def test_fetch_with_timeout_custom_timeout(self, base_service):
        """A per-call timeout overrides the service default."""
        # Setup
        async def slow_coro():
            await asyncio.sleep(0.1)
            return "late"

        # Execute
        result = await base_service.fetch_with_timeout(slow_coro(), timeout_ms=500)

        # Verify
        assert result == "late"

    @pytest.mark.asyncio
    async def test_with_timeout_raises(self, base_service):
        """Test with_timeout raises a typed timeout error."""
        # Setup
        async def slow_coro():
            await asyncio.sleep(0.5)

        # Execute / Verify
        with pytest.raises(RpcTimeoutError) as exc_info:
            await base_service.with_timeout(slow_coro(), operation_name="native balance")

        assert "native balance timed out" in exc_info.value.message
        assert exc_info.value.details["timeout"] == pytest.approx(0.05)

    @pytest.mark.asyncio
    async def test_log_timing_reraises(self, base_service):
        """The timing context manager never swallows errors."""
        with pytest.raises(RuntimeError):
            async with base_service.log_timing("test operation"):
                raise RuntimeError("boom")


class TestHandleErrors:
    """Test suite for the handle_errors decorator."""

    @pytest.mark.asyncio
    async def test_wraps_unexpected_errors(self):
        # Setup
        @handle_errors()
        async def broken():
            raise KeyError("value")

        # Execute / Verify
        with pytest.raises(RpcError) as exc_info:
            await broken()
        assert isinstance(exc_info.value.__cause__, KeyError)

    @pytest.mark.asyncio
    async def test_passes_domain_errors_through(self):
        # Setup
        @handle_errors()
        async def malformed():
            raise DataParsingError("bad payload", data_type="holder")

        # Execute / Verify
        with pytest.raises(DataParsingError):
            await malformed()
