"""Unit tests for graceful-degradation helpers."""

import inspect
from unittest.mock import patch

import pytest

from recipe_service.utils.safe_execute import safe_execute_async, safe_execute_sync


async def _boom():
    raise RuntimeError("down")


async def _value():
    return {"photos": []}


class TestSafeExecuteAsync:
    """Test safe_execute_async."""

    @pytest.mark.asyncio
    async def test_returns_result(self):
        assert await safe_execute_async(_value(), "lookup") == {"photos": []}

    @pytest.mark.asyncio
    @patch("recipe_service.utils.safe_execute.logger")
    async def test_failure_returns_default_and_logs_error(self, mock_logger):
        result = await safe_execute_async(_boom(), "Photo search", log_level="error", default_return="fallback")

        assert result == "fallback"
        mock_logger.error.assert_called_once_with("Photo search: down")
        mock_logger.warning.assert_not_called()

    def test_has_no_reraise_switch(self):
        """Failures are always absorbed; callers that need errors do not use this helper."""
        assert "reraise" not in inspect.signature(safe_execute_async).parameters
        assert "reraise" not in inspect.signature(safe_execute_sync).parameters


class TestSafeExecuteSync:
    """Test safe_execute_sync."""

    def test_returns_result(self):
        assert safe_execute_sync(lambda: [1, 2], "parse") == [1, 2]

    @patch("recipe_service.utils.safe_execute.logger")
    def test_failure_logs_at_requested_level(self, mock_logger):
        result = safe_execute_sync(lambda: int("x"), "JSON array parse", log_level="debug")

        assert result is None
        mock_logger.debug.assert_called_once()
        assert mock_logger.debug.call_args[0][0].startswith("JSON array parse: ")

    @patch("recipe_service.utils.safe_execute.logger")
    def test_unknown_level_falls_back_to_warning(self, mock_logger):
        safe_execute_sync(lambda: 1 / 0, "divide", log_level="loud")

        mock_logger.warning.assert_called_once_with("divide: division by zero")
