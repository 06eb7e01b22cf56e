from typing import Optional
import logging

import jwt
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from app.core.config import settings
from app.models.user import AuthenticatedUser, UserRole

logger = logging.getLogger(__name__)

# auto_error=False：缺少標頭時交由各端點決定是否回傳未授權
bearer_scheme = HTTPBearer(auto_error=False)


def decode_access_token(token: str) -> Optional[dict]:
    """解碼 JWT，無效或過期時回傳 None"""
    try:
        return jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except jwt.PyJWTError as e:
        logger.debug(f"JWT 解碼失敗: {e}")
        return None


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme)
) -> Optional[AuthenticatedUser]:
    """依賴注入：取得目前登入的用戶，未登入時回傳 None"""
    if credentials is None:
        return None

    payload = decode_access_token(credentials.credentials)
    if payload is None or not payload.get("sub"):
        return None

    return AuthenticatedUser(
        user_id=payload["sub"],
        email=payload.get("email"),
        role=payload.get("role") or UserRole.USER.value,
    )
