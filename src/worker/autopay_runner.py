"""Autopay Background Worker

Charges saved cards for every autopay lease due today.
Can be run as a standalone script (cron) or continuously.
"""

import asyncio
import logging
import time
from datetime import date, datetime
from typing import Optional
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.adapter.repositories.lease_repository import SqlAlchemyLeaseRepository
from src.adapter.repositories.payment_repository import SqlAlchemyPaymentRepository
from src.adapter.repositories.tenant_repository import SqlAlchemyTenantRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.adapter.services.gateway_factory import create_payment_gateway
from src.app.services.payment_gateway import PaymentGateway
from src.app.use_cases.billing import RunAutopay, AutopayRunResultDTO

logger = logging.getLogger(__name__)


class AutopayWorker:
    """
    Background worker for autopay runs

    Features:
    - Charges every lease whose next_due_date is the run date
    - One lease failing never stops the others
    - Idempotent per date: paid leases are not charged again, declined ones
      are retried
    - Can run once or continuously

    Usage:
        # Run for today (typical cron usage)
        worker = AutopayWorker()
        result = await worker.run_once()

        # Run for a specific date
        result = await worker.run_once(as_of=date(2025, 4, 1))

        # Run continuously
        await worker.run_forever()
    """

    def __init__(
        self,
        db_uri: Optional[str] = None,
        gateway: Optional[PaymentGateway] = None,
        charge_timeout: Optional[float] = None,
    ):
        """
        Initialize the worker

        Args:
            db_uri: Database URI (defaults to ApplicationConfig.DB_URI)
            gateway: Payment gateway (defaults to Square from ApplicationConfig)
            charge_timeout: Seconds allowed per charge
        """
        self.db_uri = db_uri or ApplicationConfig.DB_URI
        self.gateway = gateway if gateway is not None else create_payment_gateway(ApplicationConfig)
        self.charge_timeout = charge_timeout or ApplicationConfig.AUTOPAY_CHARGE_TIMEOUT_SECONDS

        self.engine = create_async_engine(self.db_uri, echo=False, future=True)
        self.async_session_factory = sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
        )

        logger.info("AutopayWorker initialized")

    async def run_once(self, as_of: Optional[date] = None) -> Optional[AutopayRunResultDTO]:
        """
        Run autopay once

        Args:
            as_of: Due date to charge for (defaults to today, UTC)

        Returns:
            AutopayRunResultDTO, or None if the run could not start
        """
        start_time = time.time()
        as_of = as_of or datetime.utcnow().date()

        logger.info(f"Starting autopay run for {as_of.isoformat()}")

        async with self.async_session_factory() as session:
            use_case = RunAutopay(
                uow=SqlAlchemyUnitOfWork(session),
                lease_repo=SqlAlchemyLeaseRepository(session),
                payment_repo=SqlAlchemyPaymentRepository(session),
                tenant_repo=SqlAlchemyTenantRepository(session),
                gateway=self.gateway,
                charge_timeout=self.charge_timeout,
            )
            result = await use_case.execute(as_of)

        execution_time_ms = int((time.time() - start_time) * 1000)

        if result.is_err():
            logger.error(
                f"Autopay run for {as_of.isoformat()} did not start: "
                f"{result.error.code} {result.error.message} ({result.error.reason})"
            )
            return None

        summary = result.value
        logger.info(
            f"Autopay run complete: {summary.succeeded}/{summary.count} paid, "
            f"{summary.failed} failed, {execution_time_ms}ms"
        )
        return summary

    async def run_forever(self, check_interval_seconds: Optional[int] = None):
        """
        Run autopay continuously

        Each cycle charges leases due today; repeating a date is harmless.

        Args:
            check_interval_seconds: Seconds between runs (default: AUTOPAY_INTERVAL_SECONDS)
        """
        interval = check_interval_seconds or ApplicationConfig.AUTOPAY_INTERVAL_SECONDS

        if not ApplicationConfig.AUTOPAY_ENABLED:
            logger.warning("Autopay is disabled (AUTOPAY_ENABLED=false); worker not started")
            return

        logger.info(f"Starting continuous autopay with {interval}s interval")

        while True:
            try:
                await self.run_once()
            except Exception as e:
                logger.error(f"Autopay cycle failed: {e}")

            await asyncio.sleep(interval)

    async def shutdown(self):
        """Cleanup resources"""
        if self.gateway is not None:
            await self.gateway.aclose()
        await self.engine.dispose()
        logger.info("AutopayWorker shutdown complete")


async def main():
    """
    Entry point for running the worker as a standalone script

    Usage:
        # Run for today
        python -m src.worker.autopay_runner

        # Run for a specific date
        python -m src.worker.autopay_runner --date 2025-04-01

        # Run continuously
        python -m src.worker.autopay_runner --continuous
    """
    import argparse

    logging.basicConfig(
        level=ApplicationConfig.LOG_LEVEL,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    parser = argparse.ArgumentParser(description="Autopay Worker")
    parser.add_argument(
        "--date", type=date.fromisoformat, help="Due date to charge for (YYYY-MM-DD)"
    )
    parser.add_argument(
        "--continuous", action="store_true", help="Run continuously"
    )
    args = parser.parse_args()

    worker = AutopayWorker()

    try:
        if args.continuous:
            await worker.run_forever()
        else:
            result = await worker.run_once(as_of=args.date)
            if result is None:
                print("Autopay run did not start (see log)")
                return
            print(f"Autopay complete for {result.date.isoformat()}:")
            print(f"  Leases due: {result.count}")
            print(f"  Paid: {result.succeeded}")
            print(f"  Failed: {result.failed}")
            for item in result.results:
                if not item.ok:
                    print(f"    lease {item.lease_id}: {item.error}")
    except KeyboardInterrupt:
        logger.info("Received shutdown signal")
    finally:
        await worker.shutdown()


if __name__ == "__main__":
    asyncio.run(main())
