from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel
from typing import Optional, List, Any, Mapping
from datetime import date
from enum import Enum


class Gender(str, Enum):
    """性別"""
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class Region(str, Enum):
    """偏好地區"""
    NORTH = "NORTH"          # 北部
    SOUTH = "SOUTH"          # 南部
    EAST = "EAST"            # 東部
    CENTRAL = "CENTRAL"      # 中部
    ISLANDS = "ISLANDS"      # 離島
    OVERSEAS = "OVERSEAS"    # 海外


class EventType(str, Enum):
    """偏好活動類型"""
    POP = "POP"                  # 流行音樂
    ROCK = "ROCK"                # 搖滾
    ELECTRONIC = "ELECTRONIC"    # 電子音樂
    HIP_HOP = "HIP_HOP"          # 嘻哈/饒舌
    JAZZ_BLUES = "JAZZ_BLUES"    # 爵士/藍調
    CLASSICAL = "CLASSICAL"      # 古典/交響樂
    OTHER = "OTHER"              # 其他


class UserRole(str, Enum):
    """用戶角色"""
    USER = "user"
    ADMIN = "admin"


# 個人資料查詢允許回傳的欄位，刻意不含密碼
PROFILE_FIELDS = (
    "user_id",
    "email",
    "name",
    "nickname",
    "role",
    "phone",
    "birthday",
    "gender",
    "preferred_regions",
    "preferred_event_types",
    "country",
    "address",
    "avatar",
    "is_email_verified",
    "oauth_providers",
    "search_history",
)


class UserProfileData(BaseModel):
    """個人資料回應模型，gender 為在地化標籤"""

    user_id: str
    email: str
    name: Optional[str] = None
    nickname: Optional[str] = None
    role: str = UserRole.USER.value
    phone: Optional[str] = None
    birthday: Optional[date] = None
    gender: Optional[str] = None
    preferred_regions: List[str] = Field(default_factory=list)
    preferred_event_types: List[str] = Field(default_factory=list)
    country: Optional[str] = None
    address: Optional[str] = None
    avatar: Optional[str] = None
    is_email_verified: bool = False
    oauth_providers: List[Any] = Field(default_factory=list)
    search_history: List[str] = Field(default_factory=list)

    class Config:
        alias_generator = to_camel
        populate_by_name = True

    @classmethod
    def from_row(cls, row: Mapping[str, Any], gender_label: Optional[str]) -> "UserProfileData":
        """由資料庫查詢結果建立回應物件"""
        return cls(
            user_id=row["user_id"],
            email=row["email"],
            name=row["name"],
            nickname=row["nickname"],
            role=row["role"] or UserRole.USER.value,
            phone=row["phone"],
            birthday=row["birthday"],
            gender=gender_label,
            preferred_regions=row["preferred_regions"] or [],
            preferred_event_types=row["preferred_event_types"] or [],
            country=row["country"],
            address=row["address"],
            avatar=row["avatar"],
            is_email_verified=bool(row["is_email_verified"]),
            oauth_providers=row["oauth_providers"] or [],
            search_history=row["search_history"] or [],
        )


class UpdateProfileRequest(BaseModel):
    """
    更新個人資料請求

    所有欄位皆為選填：未傳入表示不變更，傳入 null 表示清空。
    birthday、gender 與偏好清單的格式由服務層逐欄驗證，
    以便回傳帶有錯誤碼的訊息。
    """

    name: Optional[str] = None
    nickname: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    country: Optional[str] = None
    birthday: Any = None
    gender: Any = None
    preferred_regions: Any = None
    preferred_event_types: Any = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        coerce_numbers_to_str = True


class AuthenticatedUser(BaseModel):
    """身分驗證後注入請求的使用者資訊"""

    user_id: str
    email: Optional[str] = None
    role: str = UserRole.USER.value
