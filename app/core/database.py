from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker, AsyncEngine
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import NullPool
from sqlalchemy import text
from typing import AsyncGenerator, Optional
import logging

from app.core.config import settings

logger = logging.getLogger(__name__)

# 建立基礎模型類
Base = declarative_base()

# 全域資料庫引擎
engine: Optional[AsyncEngine] = None
async_session_maker: Optional[async_sessionmaker] = None


async def init_database() -> None:
    """初始化資料庫連線"""
    global engine, async_session_maker

    try:
        engine = create_async_engine(
            settings.database_url_computed,
            echo=settings.debug,  # 除錯模式下列印SQL
            poolclass=NullPool if settings.is_testing else None,
            pool_pre_ping=True,
        )

        async_session_maker = async_sessionmaker(
            engine,
            class_=AsyncSession,
            expire_on_commit=False
        )

        logger.info("資料庫連線初始化成功")

    except Exception as e:
        logger.error(f"資料庫連線初始化失敗: {e}")
        raise


async def close_database() -> None:
    """關閉資料庫連線"""
    global engine

    if engine:
        await engine.dispose()
        logger.info("資料庫連線已關閉")


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """取得資料庫會話的依賴注入函式"""
    if not async_session_maker:
        raise RuntimeError("資料庫未初始化，請先呼叫 init_database()")

    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


class DatabaseService:
    """資料庫服務類"""

    @property
    def engine(self):
        return engine

    async def health_check(self) -> dict:
        """資料庫健康檢查"""
        try:
            if not self.engine:
                return {"status": "error", "message": "資料庫引擎未初始化"}

            async with self.engine.begin() as conn:
                result = await conn.execute(text("SELECT 1"))
                row = result.fetchone()

            return {
                "status": "healthy",
                "message": "資料庫連線正常",
                "test_query_result": row[0] if row else None
            }

        except Exception as e:
            return {
                "status": "error",
                "message": f"資料庫連線失敗: {str(e)}"
            }


# 全域資料庫服務實例
database_service = DatabaseService()
