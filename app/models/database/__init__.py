"""
資料庫模型套件
"""

from .user_db import UserDB

__all__ = [
    "UserDB"
]
