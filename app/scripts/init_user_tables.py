"""
用戶資料表初始化腳本

執行方式:
python -m app.scripts.init_user_tables [create|drop|check]
"""

import asyncio
import logging
import sys
from sqlalchemy import text

from app.core import database
from app.core.database import Base, init_database, close_database
from app.models.database.user_db import UserDB  # noqa: F401 註冊資料表

logger = logging.getLogger(__name__)

USER_TABLES = ["users"]


async def create_user_tables():
    """建立用戶相關資料表"""
    try:
        await init_database()

        if not database.engine:
            raise RuntimeError("資料庫引擎未初始化")

        logger.info("開始建立用戶資料表...")
        async with database.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

        logger.info("用戶資料表建立完成")

    except Exception as e:
        logger.error(f"建立用戶資料表失敗: {e}")
        raise
    finally:
        await close_database()


async def drop_user_tables():
    """刪除用戶相關資料表（謹慎使用）"""
    try:
        await init_database()

        if not database.engine:
            raise RuntimeError("資料庫引擎未初始化")

        logger.warning("開始刪除用戶資料表...")
        async with database.engine.begin() as conn:
            for table in USER_TABLES:
                await conn.execute(text(f"DROP TABLE IF EXISTS {table} CASCADE"))
                logger.warning(f"資料表已刪除: {table}")

    except Exception as e:
        logger.error(f"刪除用戶資料表失敗: {e}")
        raise
    finally:
        await close_database()


async def check_tables_exist() -> bool:
    """檢查資料表是否存在"""
    try:
        await init_database()

        if not database.engine:
            raise RuntimeError("資料庫引擎未初始化")

        async with database.engine.begin() as conn:
            result = await conn.execute(text(
                """
                SELECT table_name
                FROM information_schema.tables
                WHERE table_schema = 'public'
                AND table_name = ANY(:tables)
                """
            ), {"tables": USER_TABLES})
            tables = [row[0] for row in result.fetchall()]

        missing_tables = set(USER_TABLES) - set(tables)
        if missing_tables:
            logger.warning(f"缺少資料表: {missing_tables}")
            return False

        logger.info("所有用戶資料表都存在")
        return True

    finally:
        await close_database()


COMMANDS = {
    "create": create_user_tables,
    "drop": drop_user_tables,
    "check": check_tables_exist,
}


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    command = sys.argv[1] if len(sys.argv) > 1 else "create"
    if command not in COMMANDS:
        print(f"未知指令: {command}，可用指令: {', '.join(COMMANDS)}")
        sys.exit(1)

    asyncio.run(COMMANDS[command]())
