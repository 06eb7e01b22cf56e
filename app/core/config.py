from pydantic_settings import BaseSettings
from typing import Optional
from enum import Enum


class Environment(str, Enum):

    """執行環境列舉"""
    TESTING = "testing"
    PRODUCTION = "production"


class Settings(BaseSettings):

    # 應用基礎設定
    app_name: str = "User Profile Service"
    app_version: str = "1.0.0"
    environment: Environment = Environment.TESTING
    debug: bool = True
    api_prefix: str = "/api/users"

    # 資料庫設定
    database_url: Optional[str] = None
    db_host: str = "localhost"
    db_port: int = 5432
    db_name: str = "user_profile_db"
    db_user: str = "user_profile_user"
    db_password: str = "user_profile_password"

    # JWT 身分驗證設定
    jwt_secret: str = "secret-key-change-in-production"
    jwt_algorithm: str = "HS256"

    # 日誌設定
    log_level: str = "INFO"

    @property
    def is_testing(self) -> bool:
        return self.environment == Environment.TESTING

    @property
    def is_production(self) -> bool:
        return self.environment == Environment.PRODUCTION

    @property
    def database_url_computed(self) -> str:
        """計算資料庫URL"""
        if self.database_url:
            return self.database_url
        return f"postgresql+asyncpg://{self.db_user}:{self.db_password}@{self.db_host}:{self.db_port}/{self.db_name}"

    class Config:
        env_file = ".env"
        case_sensitive = False


# 全域設定實例
settings = Settings()
