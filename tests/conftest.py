"""
Pytest 設定與共用 fixtures

- 測試用環境變數 (在匯入 app 之前設定)
- 每個測試一個全新的 in-memory SQLite (aiosqlite) 資料庫
- 以 dependency_overrides 替換 get_db / get_current_user / get_ai_client 的 FastAPI app
"""
import os
import sys

# Ensure the project root is on sys.path for imports during tests
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ["USER_MATCH_BATCH_DELAY_SECONDS"] = "0"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.main import app as fastapi_app
from app.core.database import Base, get_db
from app.core.security import get_current_user
from app.core.ai_client import get_ai_client

from helpers import StubAIClient


@pytest_asyncio.fixture
async def db_engine():
    """每個測試建立一個獨立的 in-memory 資料庫"""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(db_engine):
    async_session = sessionmaker(
        bind=db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    async with async_session() as session:
        yield session


@pytest.fixture
def ai_stub():
    return StubAIClient("A strong fit for the required stack.")


@pytest.fixture
def override_app(db_session, ai_stub):
    """
    回傳一個函式：指定呼叫者 (Profile) 後套用 dependency_overrides
    """
    async def override_get_db():
        yield db_session

    def _apply(current_user, ai_client=None):
        fastapi_app.dependency_overrides[get_db] = override_get_db
        fastapi_app.dependency_overrides[get_current_user] = lambda: current_user
        fastapi_app.dependency_overrides[get_ai_client] = lambda: ai_client or ai_stub
        return fastapi_app

    yield _apply

    fastapi_app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client():
    async with AsyncClient(transport=ASGITransport(app=fastapi_app), base_url="http://test") as ac:
        yield ac
