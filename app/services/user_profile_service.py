"""
用戶個人資料業務服務層
處理個人資料的讀取、欄位驗證、在地化轉換與更新
"""

import logging
from typing import Any, Dict, List, Callable
from datetime import date, datetime

from app.api.exceptions import ApiError
from app.models.localization import (
    GENDER_LABELS,
    UnrecognizedValueError,
    gender_to_label,
    parse_gender,
    parse_region,
    parse_event_type,
    region_options,
    event_type_options,
)
from app.models.responses import OptionItem
from app.models.user import UpdateProfileRequest, UserProfileData
from app.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)

# 不經驗證直接寫入的欄位
PASSTHROUGH_FIELDS = ("name", "nickname", "phone", "address", "country")


def _accepted_hint(labels) -> str:
    return "有效值為 " + ", ".join(f'"{label}"' for label in labels) + "。"


def _parse_birthday(value: Any) -> date:
    if not isinstance(value, str):
        raise ApiError.invalid_data('生日欄位格式錯誤：請提供有效的日期字串 (例如 "YYYY-MM-DD")。')
    if value.strip() == "":
        raise ApiError.invalid_data("生日欄位格式錯誤：如需清空生日，請傳遞 null；否則請提供有效的日期字串。")

    text = value.strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        raise ApiError.invalid_data('生日欄位格式錯誤：請提供有效的日期字串 (例如 "YYYY-MM-DD")。')


def _parse_gender(value: Any) -> str:
    if not isinstance(value, str):
        raise ApiError.invalid_data("性別欄位格式不正確。")
    if value.strip() == "":
        raise ApiError.invalid_data(f"性別欄位不能為空字串。如需清除，請傳遞 null。{_accepted_hint(GENDER_LABELS.values())}")
    try:
        return parse_gender(value).value
    except UnrecognizedValueError as e:
        raise ApiError.invalid_data(f'性別欄位包含無效的值: "{value}"。{_accepted_hint(e.accepted)}')


def _parse_enum_list(field: str, value: Any, parse: Callable[[str], Any]) -> List[str]:
    if not isinstance(value, list):
        raise ApiError.invalid_data(f"{field} 必須是陣列")

    parsed = []
    for item in value:
        if not isinstance(item, str):
            raise ApiError.invalid_data(f"{field} 包含無效的值")
        try:
            parsed.append(parse(item).value)
        except UnrecognizedValueError:
            raise ApiError.invalid_data(f'{field} 包含無效的值: "{item}"')
    return parsed


class UserProfileService:
    """用戶個人資料業務服務"""

    def __init__(self, user_repo: UserRepository):
        self.user_repo = user_repo

    async def get_profile(self, user_id: str) -> UserProfileData:
        """取得個人資料，性別轉為中文標籤"""
        row = await self.user_repo.get_profile(user_id)
        if row is None:
            logger.warning(f"用戶資料不存在: {user_id}")
            raise ApiError.not_found("用戶資料")

        return UserProfileData.from_row(row, gender_to_label(row["gender"]))

    def validate_update(self, request: UpdateProfileRequest) -> Dict[str, Any]:
        """
        驗證更新內容並轉為資料庫欄位值

        只處理請求中實際傳入的欄位；任何欄位驗證失敗都會在寫入前拋出 ApiError，
        因此不會有部分更新。
        """
        provided = request.model_fields_set
        changes: Dict[str, Any] = {}

        for field in PASSTHROUGH_FIELDS:
            if field in provided:
                changes[field] = getattr(request, field)

        if "birthday" in provided:
            birthday = request.birthday
            changes["birthday"] = None if birthday is None else _parse_birthday(birthday)

        if "gender" in provided:
            gender = request.gender
            changes["gender"] = None if gender is None else _parse_gender(gender)

        if "preferred_regions" in provided:
            changes["preferred_regions"] = _parse_enum_list(
                "preferredRegions", request.preferred_regions, parse_region
            )

        if "preferred_event_types" in provided:
            changes["preferred_event_types"] = _parse_enum_list(
                "preferredEventTypes", request.preferred_event_types, parse_event_type
            )

        return changes

    async def update_profile(self, user_id: str, request: UpdateProfileRequest) -> UserProfileData:
        """更新個人資料並回傳更新後的資料"""
        user = await self.user_repo.get_by_user_id(user_id)
        if user is None:
            logger.warning(f"用戶不存在，無法更新: {user_id}")
            raise ApiError.not_found("用戶")

        changes = self.validate_update(request)
        for field, value in changes.items():
            setattr(user, field, value)

        await self.user_repo.save(user)
        logger.info(f"用戶資料更新成功: {user_id}, 欄位: {sorted(changes)}")

        row = await self.user_repo.get_profile(user_id)
        if row is None:
            logger.error(f"更新後重新讀取用戶資料失敗: {user_id}")
            raise ApiError.system_error()

        return UserProfileData.from_row(row, gender_to_label(row["gender"]))

    @staticmethod
    def get_region_options() -> List[OptionItem]:
        """地區選項"""
        return region_options()

    @staticmethod
    def get_event_type_options() -> List[OptionItem]:
        """活動類型選項"""
        return event_type_options()
