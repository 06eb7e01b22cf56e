from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.exceptions import ApiError
from app.core.config import settings
from app.core.database import get_db_session
from app.core.security import get_current_user
from app.models.responses import success_response
from app.models.user import AuthenticatedUser, UpdateProfileRequest
from app.repositories.user_repository import UserRepository
from app.services.user_profile_service import UserProfileService

router = APIRouter(prefix=settings.api_prefix, tags=["用戶資料"])


def get_user_profile_service(db: AsyncSession = Depends(get_db_session)) -> UserProfileService:
    """每個請求使用獨立的資料庫會話"""
    return UserProfileService(UserRepository(db))


def _require_user(current_user: Optional[AuthenticatedUser]) -> AuthenticatedUser:
    if current_user is None:
        raise ApiError.unauthorized()
    return current_user


@router.get("/profile")
async def get_user_profile(
    current_user: Optional[AuthenticatedUser] = Depends(get_current_user),
    service: UserProfileService = Depends(get_user_profile_service)
):
    """獲取用戶個人資料"""
    user = _require_user(current_user)
    profile = await service.get_profile(user.user_id)
    return success_response(
        "獲取用戶資料成功",
        {"user": profile.model_dump(mode="json", by_alias=True)}
    )


@router.put("/profile")
async def update_user_profile(
    request: Optional[UpdateProfileRequest] = None,
    current_user: Optional[AuthenticatedUser] = Depends(get_current_user),
    service: UserProfileService = Depends(get_user_profile_service)
):
    """更新用戶個人資料"""
    user = _require_user(current_user)
    if request is None:
        request = UpdateProfileRequest()
    profile = await service.update_profile(user.user_id, request)
    return success_response(
        "用戶資料更新成功",
        {"user": profile.model_dump(mode="json", by_alias=True)}
    )


@router.get("/regions")
async def get_region_options():
    """獲取地區選項"""
    options = UserProfileService.get_region_options()
    return success_response(
        "獲取地區選項成功",
        [option.model_dump(by_alias=True) for option in options]
    )


@router.get("/event-types")
async def get_event_type_options():
    """獲取活動類型選項"""
    options = UserProfileService.get_event_type_options()
    return success_response(
        "獲取活動類型選項成功",
        [option.model_dump(by_alias=True) for option in options]
    )
