"""
用戶資料 API 端點測試
"""

import pytest
from datetime import timedelta
from unittest.mock import AsyncMock
from fastapi.testclient import TestClient
from sqlalchemy.exc import SQLAlchemyError

from app.api.users import get_user_profile_service
from app.main import app
from app.models.user import PROFILE_FIELDS
from app.repositories.user_repository import UserRepository
from app.services.user_profile_service import UserProfileService


class TestUsersApi:
    """用戶資料 API 測試"""

    @pytest.fixture
    def mock_user_repo(self, sample_user_db):
        repo = AsyncMock(spec=UserRepository)
        repo.get_by_user_id.return_value = sample_user_db
        repo.get_profile.side_effect = lambda user_id: (
            {field: getattr(sample_user_db, field) for field in PROFILE_FIELDS}
            if user_id == sample_user_db.user_id else None
        )
        return repo

    @pytest.fixture
    def client(self, mock_user_repo):
        app.dependency_overrides[get_user_profile_service] = lambda: UserProfileService(mock_user_repo)
        yield TestClient(app)
        app.dependency_overrides.clear()

    @pytest.fixture
    def auth_headers(self, make_token):
        token = make_token("test_user_001", email="test001@example.com")
        return {"Authorization": f"Bearer {token}"}

    def test_get_profile(self, client, auth_headers):
        response = client.get("/api/users/profile", headers=auth_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "success"
        assert body["message"] == "獲取用戶資料成功"

        user = body["data"]["user"]
        assert user["userId"] == "test_user_001"
        assert user["gender"] == "男"
        assert user["birthday"] == "1990-05-20"
        assert user["preferredRegions"] == ["NORTH", "EAST"]
        assert user["isEmailVerified"] is True
        assert "password" not in user

    def test_get_profile_without_token(self, client):
        response = client.get("/api/users/profile")

        assert response.status_code == 401
        assert response.json() == {
            "status": "failed",
            "message": "請先登入",
            "errorCode": "UNAUTHORIZED"
        }

    def test_get_profile_with_invalid_token(self, client):
        response = client.get("/api/users/profile", headers={"Authorization": "Bearer not-a-jwt"})

        assert response.status_code == 401
        assert response.json()["errorCode"] == "UNAUTHORIZED"

    def test_get_profile_with_expired_token(self, client, make_token):
        token = make_token("test_user_001", expires_delta=timedelta(minutes=-5))

        response = client.get("/api/users/profile", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401

    def test_get_profile_not_found(self, client, make_token):
        token = make_token("ghost_user")

        response = client.get("/api/users/profile", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 404
        body = response.json()
        assert body["status"] == "failed"
        assert body["errorCode"] == "NOT_FOUND"
        assert "data" not in body

    def test_update_profile(self, client, auth_headers, mock_user_repo):
        response = client.put("/api/users/profile", headers=auth_headers, json={
            "nickname": "阿明",
            "gender": "女",
            "birthday": None,
            "preferredEventTypes": ["POP"]
        })

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "用戶資料更新成功"
        user = body["data"]["user"]
        assert user["nickname"] == "阿明"
        assert user["gender"] == "女"
        assert user["birthday"] is None
        assert user["preferredEventTypes"] == ["POP"]
        mock_user_repo.save.assert_awaited_once()

    def test_update_profile_invalid_gender(self, client, auth_headers, mock_user_repo):
        response = client.put("/api/users/profile", headers=auth_headers, json={"gender": ""})

        assert response.status_code == 400
        assert response.json()["errorCode"] == "DATA_INVALID"
        mock_user_repo.save.assert_not_called()

    def test_update_profile_invalid_region(self, client, auth_headers):
        response = client.put("/api/users/profile", headers=auth_headers, json={
            "preferredRegions": ["NOT_A_REGION"]
        })

        assert response.status_code == 400
        assert response.json()["errorCode"] == "DATA_INVALID"

    def test_update_profile_malformed_body(self, client, auth_headers):
        response = client.put("/api/users/profile", headers=auth_headers, json=["not", "an", "object"])

        assert response.status_code == 400
        assert response.json()["errorCode"] == "DATA_INVALID"

    def test_update_profile_without_token(self, client, mock_user_repo):
        response = client.put("/api/users/profile", json={"name": "陳大文"})

        assert response.status_code == 401
        mock_user_repo.get_by_user_id.assert_not_called()

    def test_update_profile_without_body(self, client, auth_headers, mock_user_repo):
        """測試未帶請求內容時視為空更新"""
        response = client.put("/api/users/profile", headers=auth_headers)

        assert response.status_code == 200
        user = response.json()["data"]["user"]
        assert user["nickname"] == "小明"
        assert user["gender"] == "男"
        mock_user_repo.save.assert_awaited_once()

    def test_update_profile_numeric_phone(self, client, auth_headers):
        """測試數字型態的直接寫入欄位會轉為字串"""
        response = client.put("/api/users/profile", headers=auth_headers, json={"phone": 912345678})

        assert response.status_code == 200
        assert response.json()["data"]["user"]["phone"] == "912345678"

    def test_update_profile_database_failure(self, client, auth_headers, mock_user_repo):
        """測試寫入資料庫失敗時回報系統錯誤"""
        mock_user_repo.save.side_effect = SQLAlchemyError("connection lost")

        response = client.put("/api/users/profile", headers=auth_headers, json={"name": "陳大文"})

        assert response.status_code == 500
        body = response.json()
        assert body["status"] == "failed"
        assert body["errorCode"] == "SYSTEM_ERROR"
        assert "connection lost" not in body["message"]

    def test_update_profile_unexpected_error(self, mock_user_repo, auth_headers):
        """測試未預期的例外以統一格式回報"""
        mock_user_repo.save.side_effect = RuntimeError("unexpected")
        app.dependency_overrides[get_user_profile_service] = lambda: UserProfileService(mock_user_repo)
        client = TestClient(app, raise_server_exceptions=False)

        try:
            response = client.put("/api/users/profile", headers=auth_headers, json={"name": "陳大文"})
        finally:
            app.dependency_overrides.clear()

        assert response.status_code == 500
        assert response.json() == {
            "status": "failed",
            "message": "系統錯誤，請稍後再試",
            "errorCode": "SYSTEM_ERROR"
        }

    def test_region_options(self, client):
        response = client.get("/api/users/regions")

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "獲取地區選項成功"
        assert len(body["data"]) == 6
        assert body["data"][0] == {"label": "北部", "value": "北部", "subLabel": "North"}
        assert all(option["label"] == option["value"] and option["subLabel"] for option in body["data"])

    def test_event_type_options(self, client):
        first = client.get("/api/users/event-types").json()
        second = client.get("/api/users/event-types").json()

        assert first == second
        assert first["message"] == "獲取活動類型選項成功"
        assert len(first["data"]) == 7
        assert all(option["label"] == option["value"] and option["subLabel"] for option in first["data"])

    def test_unknown_route_uses_error_envelope(self, client):
        response = client.get("/api/users/unknown")

        assert response.status_code == 404
        assert response.json()["status"] == "failed"
        assert response.json()["errorCode"] == "NOT_FOUND"

    def test_health_check(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
