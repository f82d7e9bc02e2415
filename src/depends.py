from typing import AsyncIterator, Optional
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.adapter.services.gateway_factory import create_payment_gateway, create_paypal_checkout
from src.app.services.payment_gateway import PaymentGateway
from src.app.services.paypal_checkout import PayPalCheckout

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)


async def get_session() -> AsyncSession:
    async with AsyncSessionLocal() as session:
        yield session


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


async def get_payment_gateway() -> AsyncIterator[Optional[PaymentGateway]]:
    gateway = create_payment_gateway(ApplicationConfig)
    try:
        yield gateway
    finally:
        if gateway is not None:
            await gateway.aclose()


async def get_paypal_checkout() -> AsyncIterator[Optional[PayPalCheckout]]:
    checkout = create_paypal_checkout(ApplicationConfig)
    try:
        yield checkout
    finally:
        if checkout is not None:
            await checkout.aclose()
