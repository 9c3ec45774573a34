"""上游请求头构建."""

import pytest

from relaydesk.services.providers.request_headers import build_request_headers


@pytest.mark.unit
def test_token_auth_adds_bearer_and_user_header(registry) -> None:
    headers = build_request_headers("NewApi", "token", token="sk-abc", user_id=7, registry=registry)

    assert headers == {
        "Accept": "application/json",
        "Content-Type": "application/json",
        "Authorization": "Bearer sk-abc",
        "new-api-user": "7",
    }


@pytest.mark.unit
def test_sessions_json_object_provides_token_and_cookie(registry) -> None:
    headers = build_request_headers(
        "Veloera",
        "sessions",
        sessions='{"token": "abc", "cookie": "session=xyz"}',
        user_id="12",
        registry=registry,
    )

    assert headers["Authorization"] == "Bearer abc"
    assert headers["Cookie"] == "session=xyz"
    assert headers["veloera-user"] == "12"


@pytest.mark.unit
def test_sessions_raw_string_used_as_cookie(registry) -> None:
    headers = build_request_headers("AnyRouter", "sessions", sessions="session=raw", user_id="3", registry=registry)

    assert headers["Cookie"] == "session=raw"
    assert "Authorization" not in headers
    assert headers["new-api-user"] == "3"


@pytest.mark.unit
def test_sessions_json_non_object_used_as_cookie(registry) -> None:
    headers = build_request_headers("NewApi", "sessions", sessions="123", registry=registry)

    assert headers["Cookie"] == "123"


@pytest.mark.unit
def test_provider_without_user_header_ignores_user_id(registry) -> None:
    headers = build_request_headers("DoneHub", "token", token="sk-abc", user_id="5", registry=registry)

    assert "new-api-user" not in headers
    assert set(headers) == {"Accept", "Content-Type", "Authorization"}


@pytest.mark.unit
def test_ignores_credential_of_other_auth_method(registry) -> None:
    headers = build_request_headers("VoApi", "token", sessions="session=abc", registry=registry)

    assert "Cookie" not in headers
    assert "Authorization" not in headers
