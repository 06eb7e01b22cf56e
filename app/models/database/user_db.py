import uuid

from sqlalchemy import Column, String, Date, DateTime, JSON, Boolean, Index
from sqlalchemy.sql import func
from app.core.database import Base


class UserDB(Base):
    """用戶資料庫模型"""

    __tablename__ = "users"

    # 基礎資訊
    user_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()), comment="用戶唯一識別碼")
    email = Column(String(255), nullable=False, unique=True, comment="電子郵件")
    password = Column(String(255), comment="密碼雜湊，第三方登入用戶可為空")
    role = Column(String(20), nullable=False, default="user", comment="角色")
    created_at = Column(DateTime(timezone=True), server_default=func.now(), comment="建立時間")
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), comment="更新時間")

    # 可由用戶修改的個人資料
    name = Column(String(50), comment="姓名")
    nickname = Column(String(50), comment="暱稱")
    phone = Column(String(20), comment="電話")
    birthday = Column(Date, comment="生日")
    gender = Column(String(10), comment="性別，儲存標準值 male/female/other")
    address = Column(String(255), comment="地址")
    country = Column(String(50), comment="國家")

    # 偏好設定 (JSON存儲標準列舉值)
    preferred_regions = Column(JSON, default=list, comment="偏好地區列表")
    preferred_event_types = Column(JSON, default=list, comment="偏好活動類型列表")

    # 唯讀欄位
    avatar = Column(String(500), comment="頭像網址")
    is_email_verified = Column(Boolean, nullable=False, default=False, comment="是否已驗證電子郵件")
    oauth_providers = Column(JSON, default=list, comment="已綁定的第三方登入")
    search_history = Column(JSON, default=list, comment="搜尋紀錄")

    __table_args__ = (
        Index('idx_users_email', 'email'),
        Index('idx_users_updated_at', 'updated_at'),
        {'comment': '用戶表'}
    )
