"""Bearer 令牌解析测试"""

import pytest
from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient

from yrbac.auth import TokenData, TokenPayload, create_identity_dependency, parse_bearer_token
from yrbac.exceptions import AuthenticationException, ErrorCode, register_exception_handlers


class TestParseBearerToken:

    def test_valid(self, jwt_manager):
        token = jwt_manager.create_access_token(TokenPayload(user_id=3, username="bob"))

        data = parse_bearer_token(f"Bearer {token}", jwt_manager)

        assert data.user_id == 3

    def test_scheme_case_insensitive(self, jwt_manager):
        token = jwt_manager.create_access_token(TokenPayload(user_id=3, username="bob"))

        assert parse_bearer_token(f"bearer {token}", jwt_manager).username == "bob"

    @pytest.mark.parametrize("header", [None, "", "Token abc", "Bearer", "Bearer   ", "Bearer invalid.token.value"])
    def test_rejected(self, jwt_manager, header):
        with pytest.raises(AuthenticationException) as exc_info:
            parse_bearer_token(header, jwt_manager)

        assert exc_info.value.code == ErrorCode.INVALID_TOKEN
        assert exc_info.value.status_code == 401


class TestIdentityDependency:

    @pytest.fixture
    def client(self, jwt_manager):
        app = FastAPI()
        register_exception_handlers(app)
        get_identity = create_identity_dependency(jwt_manager)

        @app.get("/me")
        def me(identity: TokenData = Depends(get_identity)):
            return {"user_id": identity.user_id, "username": identity.username}

        return TestClient(app)

    def test_authorized(self, client, jwt_manager):
        token = jwt_manager.create_access_token(TokenPayload(user_id=5, username="carol"))

        response = client.get("/me", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 200
        assert response.json() == {"user_id": 5, "username": "carol"}

    def test_missing_header(self, client):
        response = client.get("/me")

        assert response.status_code == 401
        assert response.json()["error_code"] == "INVALID_TOKEN"
