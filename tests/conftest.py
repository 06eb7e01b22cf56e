"""
測試設定 - pytest fixtures 與共用設定
"""

import pytest
import pytest_asyncio
import jwt
from datetime import date, datetime, timedelta, timezone
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.config import settings
from app.core.database import Base
from app.models.database.user_db import UserDB
from app.repositories.user_repository import UserRepository


@pytest_asyncio.fixture(scope="function")
async def test_db_engine():
    """測試資料庫引擎 - 記憶體內 SQLite"""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,  # 設為True可以看到SQL語句
        poolclass=StaticPool,
        connect_args={"check_same_thread": False}
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(test_db_engine) -> AsyncSession:
    """測試資料庫會話"""
    session_maker = async_sessionmaker(
        test_db_engine,
        class_=AsyncSession,
        expire_on_commit=False
    )

    async with session_maker() as session:
        yield session
        await session.rollback()


@pytest.fixture
def user_repository(db_session):
    """測試用戶倉庫"""
    return UserRepository(db_session)


@pytest.fixture
def sample_user_db():
    """範例用戶實體 - 尚未寫入資料庫"""
    return UserDB(
        user_id="test_user_001",
        email="test001@example.com",
        password="$2b$12$hashedpasswordvalue",
        role="user",
        name="王小明",
        nickname="小明",
        phone="0912345678",
        birthday=date(1990, 5, 20),
        gender="male",
        address="台北市信義區市府路1號",
        country="台灣",
        preferred_regions=["NORTH", "EAST"],
        preferred_event_types=["ROCK", "JAZZ_BLUES"],
        avatar="https://example.com/avatar.png",
        is_email_verified=True,
        oauth_providers=[{"provider": "google", "providerId": "google-001"}],
        search_history=["五月天", "爵士音樂節"]
    )


@pytest_asyncio.fixture
async def persisted_user(db_session, sample_user_db):
    """已寫入測試資料庫的用戶"""
    db_session.add(sample_user_db)
    await db_session.flush()
    return sample_user_db


@pytest.fixture
def make_token():
    """產生測試用 JWT，模擬登入服務簽發的 Token"""
    def _make_token(subject, email=None, role="user", expires_delta=timedelta(hours=1)):
        payload = {
            "exp": datetime.now(timezone.utc) + expires_delta,
            "sub": str(subject),
            "email": email,
            "role": role,
        }
        return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)

    return _make_token
