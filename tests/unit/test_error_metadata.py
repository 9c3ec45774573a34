import pytest
from werkzeug.exceptions import MethodNotAllowed

from relaydesk.constants import ErrorCategory, ErrorSeverity
from relaydesk.errors import (
    AppError,
    ConfigurationError,
    NotFoundError,
    UpstreamFailureError,
    UpstreamShapeError,
    ValidationError,
    map_exception_to_status,
)


@pytest.mark.unit
@pytest.mark.parametrize(
    ("error", "status_code", "category"),
    [
        (ValidationError(), 400, ErrorCategory.VALIDATION),
        (NotFoundError(), 404, ErrorCategory.BUSINESS),
        (ConfigurationError(), 500, ErrorCategory.CONFIGURATION),
        (UpstreamFailureError(), 502, ErrorCategory.EXTERNAL),
        (UpstreamShapeError(), 502, ErrorCategory.EXTERNAL),
    ],
)
def test_error_status_and_category(error, status_code, category) -> None:
    assert error.status_code == status_code
    assert error.category == category
    assert map_exception_to_status(error) == status_code


@pytest.mark.unit
def test_configuration_error_is_not_recoverable() -> None:
    error = ConfigurationError("bad yaml")

    assert error.severity == ErrorSeverity.CRITICAL
    assert error.recoverable is False


@pytest.mark.unit
def test_upstream_errors_are_recoverable() -> None:
    assert UpstreamFailureError().recoverable is True
    assert UpstreamShapeError().recoverable is True


@pytest.mark.unit
def test_message_key_resolves_default_message() -> None:
    assert NotFoundError(message_key="PROVIDER_TYPE_NOT_FOUND").message == "API类型不存在"
    assert UpstreamShapeError().message == "令牌列表数据格式异常，请检查API响应格式"
    assert AppError(message_key="NO_SUCH_KEY").message == "服务器内部错误"


@pytest.mark.unit
def test_explicit_message_wins_over_key() -> None:
    error = UpstreamFailureError("令牌已过期", message_key="TOKEN_LIST_FAILED")

    assert error.message == "令牌已过期"
    assert error.message_key == "TOKEN_LIST_FAILED"
    assert str(error) == "令牌已过期"


@pytest.mark.unit
def test_shape_error_exposes_raw_preview() -> None:
    assert UpstreamShapeError(extra={"raw_preview": "{}"}).raw_preview == "{}"
    assert UpstreamShapeError().raw_preview is None


@pytest.mark.unit
def test_map_exception_to_status_for_non_app_errors() -> None:
    assert map_exception_to_status(MethodNotAllowed()) == 405
    assert map_exception_to_status(RuntimeError("boom")) == 500
    assert map_exception_to_status(RuntimeError("boom"), default=503) == 503
