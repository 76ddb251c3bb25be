"""全局异常处理器测试"""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from yrbac.exceptions import Err, ErrorCode, register_exception_handlers
from yrbac.rbac import HierarchyCycleError, PageRequest


@pytest.fixture
def client():
    app = FastAPI()
    register_exception_handlers(app)

    @app.get("/not-found")
    def not_found():
        raise Err.not_found("角色不存在", code=ErrorCode.ROLE_NOT_FOUND)

    @app.get("/cycle")
    def cycle():
        raise HierarchyCycleError("Menu", [1, 2])

    @app.get("/crash")
    def crash():
        raise RuntimeError("unexpected")

    @app.post("/roles/page")
    def page(request: PageRequest):
        return {"page": request.page, "pageSize": request.page_size}

    return TestClient(app, raise_server_exceptions=False)


class TestExceptionHandlers:

    def test_business_exception(self, client):
        response = client.get("/not-found")

        assert response.status_code == 404
        assert response.json() == {
            "status": "error",
            "message": "角色不存在",
            "msg_details": [],
            "data": {},
            "error_code": "ROLE_NOT_FOUND",
        }

    def test_structural_details(self, client):
        response = client.get("/cycle")

        assert response.status_code == 400
        assert response.json()["error_code"] == "HIERARCHY_CYCLE"
        assert response.json()["msg_details"] == ["Menu#1", "Menu#2"]

    def test_request_validation(self, client):
        response = client.post("/roles/page", json={"page": 0, "pageSize": 10})

        assert response.status_code == 422
        assert response.json()["error_code"] == "VALIDATION_ERROR"
        assert response.json()["msg_details"][0].startswith("page:")

    def test_valid_request(self, client):
        response = client.post("/roles/page", json={"page": 2, "pageSize": 5})

        assert response.json() == {"page": 2, "pageSize": 5}

    def test_unhandled_exception(self, client):
        response = client.get("/crash")

        assert response.status_code == 500
        assert response.json()["error_code"] == "INTERNAL_SERVER_ERROR"
