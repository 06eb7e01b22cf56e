"""
用戶資料庫操作層
"""

import logging
from typing import Optional, Dict, Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import PROFILE_FIELDS
from app.models.database.user_db import UserDB

logger = logging.getLogger(__name__)


class UserRepository:
    """用戶資料庫操作類"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_user_id(self, user_id: str) -> Optional[UserDB]:
        """根據用戶ID取得完整的用戶實體，供修改使用"""
        result = await self.db.execute(
            select(UserDB).where(UserDB.user_id == user_id)
        )
        return result.scalar_one_or_none()

    async def get_profile(self, user_id: str) -> Optional[Dict[str, Any]]:
        """根據用戶ID取得個人資料，只選取允許回傳的欄位"""
        columns = [getattr(UserDB, field) for field in PROFILE_FIELDS]
        result = await self.db.execute(
            select(*columns).where(UserDB.user_id == user_id)
        )
        row = result.mappings().one_or_none()
        return dict(row) if row is not None else None

    async def save(self, user: UserDB) -> UserDB:
        """寫入用戶實體的變更"""
        try:
            self.db.add(user)
            await self.db.flush()
            return user
        except Exception as e:
            logger.error(f"儲存用戶資料失敗: {user.user_id}, {e}")
            raise
