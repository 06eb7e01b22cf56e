"""
資料模型套件
"""

from .user import (
    Gender,
    Region,
    EventType,
    UserRole,
    PROFILE_FIELDS,
    UserProfileData,
    UpdateProfileRequest,
    AuthenticatedUser
)
from .responses import OptionItem, ApiResponse, ApiErrorResponse, success_response

__all__ = [
    "Gender",
    "Region",
    "EventType",
    "UserRole",
    "PROFILE_FIELDS",
    "UserProfileData",
    "UpdateProfileRequest",
    "AuthenticatedUser",
    "OptionItem",
    "ApiResponse",
    "ApiErrorResponse",
    "success_response"
]
