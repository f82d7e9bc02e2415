import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

import src.domain  # noqa: F401
from src.depends import get_session, get_payment_gateway, get_paypal_checkout
from tests.integration.fakes import FakePaymentGateway


@pytest_asyncio.fixture(scope="function")
async def engine(tmp_path):
    """Create a fresh SQLite database file per test"""
    test_db_url = f"sqlite+aiosqlite:///{tmp_path / 'billing_test.db'}"

    engine = create_async_engine(test_db_url, echo=False, future=True)

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    """Create a new database session for each test"""
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)
    async with Session() as session:
        yield session


@pytest.fixture
def fake_gateway():
    return FakePaymentGateway()


@pytest.fixture
def app(db_session, fake_gateway):
    """Create the API with database session and gateway overrides"""
    from src.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)

    async def override_get_session():
        yield db_session

    async def override_get_payment_gateway():
        yield fake_gateway

    async def override_get_paypal_checkout():
        yield None

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_payment_gateway] = override_get_payment_gateway
    app.dependency_overrides[get_paypal_checkout] = override_get_paypal_checkout
    return app


@pytest_asyncio.fixture
async def client(app):
    """Create test client; ASGITransport does not run the lifespan, tables come from the engine fixture"""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
