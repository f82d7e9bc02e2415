"""Unit tests for AutopayWorker

Tests cover:
- Worker initialization with configuration
- run_once delegating to RunAutopay with today's date by default
- Handling a run that cannot start
- run_forever when autopay is disabled
- Shutdown and cleanup
"""

import pytest
from datetime import date
from unittest.mock import AsyncMock, MagicMock, patch

from libs.result import Return, Error
from src.worker.autopay_runner import AutopayWorker
from src.app.use_cases.billing.dtos import AutopayRunResultDTO, AutopayLeaseResultDTO


class StopLoop(Exception):
    """Raised from a patched sleep to end run_forever"""


@pytest.fixture
def mock_session():
    """Mock async session"""
    session = MagicMock()
    session.__aenter__ = AsyncMock(return_value=session)
    session.__aexit__ = AsyncMock()
    return session


@pytest.fixture
def mock_gateway():
    gateway = MagicMock()
    gateway.aclose = AsyncMock()
    return gateway


@pytest.fixture
def sample_run_result():
    return AutopayRunResultDTO(
        date=date(2025, 4, 1),
        count=2,
        results=[
            AutopayLeaseResultDTO(lease_id=1, ok=True, payment_id="sq_1", next_due_date=date(2025, 5, 1)),
            AutopayLeaseResultDTO(lease_id=2, ok=False, error="Card declined"),
        ],
    )


class TestAutopayWorkerInit:

    @patch("src.worker.autopay_runner.create_payment_gateway")
    @patch("src.worker.autopay_runner.ApplicationConfig")
    @patch("src.worker.autopay_runner.create_async_engine")
    def test_initializes_with_default_config(self, mock_create_engine, mock_app_config, mock_factory):
        """
        Given: No custom configuration provided
        When: Worker is initialized
        Then: Uses DB URI, timeout and gateway from ApplicationConfig
        """
        # Arrange
        mock_app_config.DB_URI = "sqlite+aiosqlite:///./default.db"
        mock_app_config.AUTOPAY_CHARGE_TIMEOUT_SECONDS = 12.0
        mock_factory.return_value = "square-gateway"

        # Act
        worker = AutopayWorker()

        # Assert
        assert worker.db_uri == "sqlite+aiosqlite:///./default.db"
        assert worker.charge_timeout == 12.0
        assert worker.gateway == "square-gateway"
        mock_create_engine.assert_called_once()

    @patch("src.worker.autopay_runner.create_payment_gateway")
    @patch("src.worker.autopay_runner.create_async_engine")
    def test_injected_gateway_is_used(self, mock_create_engine, mock_factory, mock_gateway):
        worker = AutopayWorker(db_uri="sqlite+aiosqlite:///./custom.db", gateway=mock_gateway)

        assert worker.db_uri == "sqlite+aiosqlite:///./custom.db"
        assert worker.gateway is mock_gateway
        mock_factory.assert_not_called()


@pytest.mark.asyncio
class TestAutopayWorkerRunOnce:

    @patch("src.worker.autopay_runner.RunAutopay")
    @patch("src.worker.autopay_runner.create_async_engine")
    async def test_run_once_for_explicit_date(
        self, mock_create_engine, mock_use_case_cls, mock_session, mock_gateway, sample_run_result
    ):
        """
        Given: A due date is passed
        When: run_once is called
        Then: RunAutopay executes for that date and its summary is returned
        """
        # Arrange
        mock_use_case_cls.return_value.execute = AsyncMock(return_value=Return.ok(sample_run_result))
        worker = AutopayWorker(db_uri="sqlite+aiosqlite:///./t.db", gateway=mock_gateway)
        worker.async_session_factory = MagicMock(return_value=mock_session)

        # Act
        result = await worker.run_once(as_of=date(2025, 4, 1))

        # Assert
        assert result is sample_run_result
        assert result.succeeded == 1
        mock_use_case_cls.return_value.execute.assert_awaited_once_with(date(2025, 4, 1))
        assert mock_use_case_cls.call_args.kwargs["gateway"] is mock_gateway

    @patch("src.worker.autopay_runner.datetime")
    @patch("src.worker.autopay_runner.RunAutopay")
    @patch("src.worker.autopay_runner.create_async_engine")
    async def test_run_once_defaults_to_today(
        self, mock_create_engine, mock_use_case_cls, mock_datetime, mock_session, mock_gateway, sample_run_result
    ):
        # Arrange
        mock_datetime.utcnow.return_value.date.return_value = date(2025, 6, 1)
        mock_use_case_cls.return_value.execute = AsyncMock(return_value=Return.ok(sample_run_result))
        worker = AutopayWorker(db_uri="sqlite+aiosqlite:///./t.db", gateway=mock_gateway)
        worker.async_session_factory = MagicMock(return_value=mock_session)

        # Act
        await worker.run_once()

        # Assert
        mock_use_case_cls.return_value.execute.assert_awaited_once_with(date(2025, 6, 1))

    @patch("src.worker.autopay_runner.RunAutopay")
    @patch("src.worker.autopay_runner.create_async_engine")
    async def test_run_that_cannot_start_returns_none(
        self, mock_create_engine, mock_use_case_cls, mock_session, mock_gateway
    ):
        # Arrange
        mock_use_case_cls.return_value.execute = AsyncMock(
            return_value=Return.err(Error(code="CONFIGURATION_ERROR", message="Payment gateway is not configured"))
        )
        worker = AutopayWorker(db_uri="sqlite+aiosqlite:///./t.db", gateway=mock_gateway)
        worker.async_session_factory = MagicMock(return_value=mock_session)

        # Act
        result = await worker.run_once(as_of=date(2025, 4, 1))

        # Assert
        assert result is None


@pytest.mark.asyncio
class TestAutopayWorkerLifecycle:

    @patch("src.worker.autopay_runner.ApplicationConfig")
    @patch("src.worker.autopay_runner.create_async_engine")
    async def test_run_forever_disabled(self, mock_create_engine, mock_app_config, mock_gateway):
        # Arrange
        mock_app_config.AUTOPAY_ENABLED = False
        mock_app_config.AUTOPAY_INTERVAL_SECONDS = 86400
        worker = AutopayWorker(db_uri="sqlite+aiosqlite:///./t.db", gateway=mock_gateway, charge_timeout=5)
        worker.run_once = AsyncMock()

        # Act
        await worker.run_forever()

        # Assert
        worker.run_once.assert_not_awaited()

    @patch("src.worker.autopay_runner.asyncio.sleep")
    @patch("src.worker.autopay_runner.ApplicationConfig")
    @patch("src.worker.autopay_runner.create_async_engine")
    async def test_run_forever_survives_failed_cycle(
        self, mock_create_engine, mock_app_config, mock_sleep, mock_gateway
    ):
        """
        Given: The first cycle raises
        When: run_forever is running
        Then: The worker sleeps and runs again
        """
        # Arrange
        mock_app_config.AUTOPAY_ENABLED = True
        mock_sleep.side_effect = [None, StopLoop()]
        worker = AutopayWorker(db_uri="sqlite+aiosqlite:///./t.db", gateway=mock_gateway, charge_timeout=5)
        worker.run_once = AsyncMock(side_effect=[RuntimeError("db down"), None])

        # Act
        with pytest.raises(StopLoop):
            await worker.run_forever(check_interval_seconds=1)

        # Assert
        assert worker.run_once.await_count == 2

    @patch("src.worker.autopay_runner.create_async_engine")
    async def test_shutdown_closes_gateway_and_engine(self, mock_create_engine, mock_gateway):
        # Arrange
        mock_create_engine.return_value.dispose = AsyncMock()
        worker = AutopayWorker(db_uri="sqlite+aiosqlite:///./t.db", gateway=mock_gateway)

        # Act
        await worker.shutdown()

        # Assert
        mock_gateway.aclose.assert_awaited_once()
        mock_create_engine.return_value.dispose.assert_awaited_once()
