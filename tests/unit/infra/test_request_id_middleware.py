"""请求 ID 注入与清理."""

import pytest
from flask import Flask

from relaydesk.infra.logging.request_middleware import REQUEST_ID_HEADER, register_request_logging
from relaydesk.utils.logging.context_vars import request_id_var


@pytest.fixture
def bare_app() -> Flask:
    app = Flask(__name__)
    app.config["TESTING"] = True
    register_request_logging(app)

    @app.get("/_test/request-id")
    def _echo_request_id():  # type: ignore[no-untyped-def]
        return {"request_id": request_id_var.get()}

    return app


@pytest.mark.unit
def test_request_id_is_propagated_to_context_and_response(bare_app) -> None:
    response = bare_app.test_client().get("/_test/request-id", headers={REQUEST_ID_HEADER: "req_test_123"})

    assert response.get_json() == {"request_id": "req_test_123"}
    assert response.headers[REQUEST_ID_HEADER] == "req_test_123"
    # teardown 后 contextvar 已复位
    assert request_id_var.get() is None


@pytest.mark.unit
@pytest.mark.parametrize("header_value", ["", "has space", "x" * 200, "-leading-dash"])
def test_invalid_request_id_is_replaced(bare_app, header_value) -> None:
    response = bare_app.test_client().get("/_test/request-id", headers={REQUEST_ID_HEADER: header_value})

    generated = response.get_json()["request_id"]
    assert generated.startswith("req_")
    assert response.headers[REQUEST_ID_HEADER] == generated
