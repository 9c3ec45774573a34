import pytest

from relaydesk.errors import UpstreamFailureError, UpstreamShapeError
from relaydesk.services.upstream.models_list_normalizer import normalize_models_list


@pytest.mark.unit
def test_models_list_success() -> None:
    result = normalize_models_list({"success": True, "data": ["gpt-4o", "claude-3-5-sonnet"]})

    assert result.success is True
    assert result.data == ["gpt-4o", "claude-3-5-sonnet"]
    assert result.message == "获取到2个模型"
    assert result.error is None


@pytest.mark.unit
def test_models_list_empty() -> None:
    result = normalize_models_list({"success": True, "data": []})

    assert result.success is True
    assert result.data == []
    assert result.message == "获取到0个模型"


@pytest.mark.unit
def test_models_list_failure_echoes_message() -> None:
    result = normalize_models_list({"success": False, "message": "令牌已过期"})

    assert result.success is False
    assert isinstance(result.error, UpstreamFailureError)
    assert result.message == "令牌已过期"


@pytest.mark.unit
def test_models_list_failure_without_message() -> None:
    result = normalize_models_list({"success": False})

    assert result.message == "获取模型列表失败"


@pytest.mark.unit
@pytest.mark.parametrize("data", [None, {"items": ["gpt-4o"]}, "gpt-4o"])
def test_models_list_requires_array(data) -> None:
    result = normalize_models_list({"success": True, "data": data})

    assert result.success is False
    assert isinstance(result.error, UpstreamShapeError)
    assert result.message == "模型列表数据格式异常"
    assert result.error.raw_preview is not None


@pytest.mark.unit
@pytest.mark.parametrize("payload", [None, [], "not json", 42])
def test_models_list_non_object_payload(payload) -> None:
    result = normalize_models_list(payload)

    assert result.success is False
    assert isinstance(result.error, UpstreamFailureError)
    assert result.message == "模型列表API返回数据格式错误"
