"""API v1 providers contract tests."""

import pytest


@pytest.mark.unit
def test_api_v1_providers_list_contract(client):
    response = client.get("/api/v1/providers")

    assert response.status_code == 200
    payload = response.get_json()
    assert payload["success"] is True
    assert payload["message"] == "获取API类型成功"

    data = payload["data"]
    assert [item["api_type"] for item in data["provider_types"]] == [
        "NewApi",
        "Veloera",
        "AnyRouter",
        "VoApi",
        "HusanApi",
        "DoneHub",
    ]
    assert [option["value"] for option in data["options"]] == [item["api_type"] for item in data["provider_types"]]
    assert {method["key"] for method in data["auth_methods"]} == {"token", "sessions"}


@pytest.mark.unit
def test_api_v1_provider_detail_contract(client):
    response = client.get("/api/v1/providers/AnyRouter")

    assert response.status_code == 200
    data = response.get_json()["data"]
    assert data["api_type"] == "AnyRouter"
    assert data["supported_auth_methods"] == ["sessions"]
    assert data["default_auto_checkin"] is True
    assert data["recommendations"]["preferred_auth_method"] == "sessions"


@pytest.mark.unit
def test_api_v1_provider_detail_unknown_returns_404(client):
    response = client.get("/api/v1/providers/OneApi")

    assert response.status_code == 404
    payload = response.get_json()
    assert payload["success"] is False
    assert payload["error"] is True
    assert payload["message_code"] == "PROVIDER_TYPE_NOT_FOUND"
    assert payload["message"] == "API类型不存在"
    assert payload["extra"]["provider_type"] == "OneApi"
    assert payload["context"]["request_id"] == response.headers["X-Request-ID"]


@pytest.mark.unit
def test_api_v1_provider_auth_method_contract(client):
    response = client.get("/api/v1/providers/NewApi/auth-methods/token")

    assert response.status_code == 200
    assert response.get_json()["data"] == {
        "provider_type": "NewApi",
        "auth_method": "token",
        "supported": True,
        "requires_user_id": True,
        "user_id_header": "new-api-user",
    }


@pytest.mark.unit
def test_api_v1_provider_auth_method_unsupported(client):
    response = client.get("/api/v1/providers/AnyRouter/auth-methods/token")

    assert response.status_code == 200
    data = response.get_json()["data"]
    assert data["supported"] is False
    assert data["requires_user_id"] is False


@pytest.mark.unit
def test_api_v1_provider_auth_method_unknown_provider(client):
    response = client.get("/api/v1/providers/OneApi/auth-methods/token")

    assert response.status_code == 404


@pytest.mark.unit
def test_api_v1_credentials_validate_valid(client):
    response = client.post(
        "/api/v1/providers/credentials/validate",
        json={"api_type": "DoneHub", "auth_method": "token", "token": "sk-abc"},
    )

    assert response.status_code == 200
    payload = response.get_json()
    assert payload["message"] == "凭据校验通过"
    assert payload["data"]["is_valid"] is True
    assert payload["data"]["errors"] == []


@pytest.mark.unit
def test_api_v1_credentials_validate_reports_errors(client):
    response = client.post(
        "/api/v1/providers/credentials/validate",
        json={"apiType": "AnyRouter", "authMethod": "token", "token": "sk-abc"},
    )

    assert response.status_code == 200
    data = response.get_json()["data"]
    assert data["is_valid"] is False
    assert data["errors"]
    assert data["summary"]


@pytest.mark.unit
def test_api_v1_credentials_validate_requires_json_object(client):
    response = client.post("/api/v1/providers/credentials/validate", json=["NewApi"])

    assert response.status_code == 400
    payload = response.get_json()
    assert payload["message_code"] == "JSON_REQUIRED"
