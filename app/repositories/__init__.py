"""
資料庫存取層
"""

from .user_repository import UserRepository

__all__ = [
    "UserRepository"
]
