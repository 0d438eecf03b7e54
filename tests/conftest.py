"""
Pytest configuration and fixtures.
"""

from decimal import Decimal
from typing import AsyncGenerator
import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.database import Base, get_db
from app.core.security import get_password_hash
from app.main import app
from app.models.user import User
from app.models.order import Order


# In-memory SQLite shared by every connection of one test
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

TEST_EMAIL = "caixa@example.com"
TEST_PASSWORD = "testpassword123"


@pytest.fixture
async def test_engine():
    """Create a fresh database per test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
        echo=False,
    )
    
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    
    yield engine
    
    await engine.dispose()


@pytest.fixture
async def db_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create test database session."""
    async_session = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    
    async with async_session() as session:
        yield session
        await session.rollback()


@pytest.fixture
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create test client with database session override."""
    
    async def override_get_db():
        yield db_session
    
    app.dependency_overrides[get_db] = override_get_db
    
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as ac:
        yield ac
    
    app.dependency_overrides.clear()


async def make_user(db_session: AsyncSession, email: str, password: str = TEST_PASSWORD) -> User:
    user = User(
        email=email,
        hashed_password=get_password_hash(password),
        full_name="Operador Teste",
        store_name="Loja Teste",
        is_active=True,
    )
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)
    return user


@pytest.fixture
async def test_user(db_session: AsyncSession) -> User:
    """Create a test operator."""
    return await make_user(db_session, TEST_EMAIL)


async def login_headers(client: AsyncClient, email: str, password: str = TEST_PASSWORD) -> dict:
    response = await client.post(
        "/api/v1/auth/login",
        json={"email": email, "password": password},
    )
    tokens = response.json()
    return {"Authorization": f"Bearer {tokens['access_token']}"}


@pytest.fixture
async def auth_headers(client: AsyncClient, test_user: User) -> dict:
    return await login_headers(client, TEST_EMAIL)


@pytest.fixture
async def auth_client(
    client: AsyncClient,
    auth_headers: dict,
) -> AsyncClient:
    """Create authenticated test client."""
    client.headers.update(auth_headers)
    return client


@pytest.fixture
async def api_client(
    client: AsyncClient,
    auth_headers: dict,
) -> AsyncGenerator[AsyncClient, None]:
    """Authenticated client rooted at /api/v1, as the payment client expects."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test/api/v1",
        headers=auth_headers,
    ) as ac:
        yield ac


@pytest.fixture
async def order(db_session: AsyncSession, test_user: User) -> Order:
    """An order of 100.00 owned by the test operator."""
    order = Order(owner_id=test_user.id, total_amount=Decimal("100.00"))
    db_session.add(order)
    await db_session.commit()
    await db_session.refresh(order)
    return order
