"""
業務服務層
"""

from .user_profile_service import UserProfileService

__all__ = [
    "UserProfileService"
]
