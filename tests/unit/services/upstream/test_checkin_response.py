"""签到响应分类."""

import pytest

from relaydesk.constants import CheckinResultKind
from relaydesk.services.upstream.checkin_response import classify_checkin_response


@pytest.mark.unit
def test_checkin_success_with_message() -> None:
    outcome = classify_checkin_response({"success": True, "message": "获得 500000 额度"})

    assert outcome.success is True
    assert outcome.kind == CheckinResultKind.CHECKIN_SUCCESS
    assert outcome.message == "签到成功: 获得 500000 额度"


@pytest.mark.unit
def test_checkin_already_done_by_marker() -> None:
    outcome = classify_checkin_response({"success": True, "message": "今天已经签到过了"})

    assert outcome.success is True
    assert outcome.kind == CheckinResultKind.ALREADY_CHECKED_IN
    assert outcome.message == "今日已签到: 今天已经签到过了"


@pytest.mark.unit
@pytest.mark.parametrize("payload", [{"success": True}, {"success": True, "message": ""}, {"success": True, "message": 1}])
def test_checkin_success_without_message_is_already_done(payload) -> None:
    outcome = classify_checkin_response(payload)

    assert outcome.kind == CheckinResultKind.ALREADY_CHECKED_IN
    assert outcome.message == "今日已签到: 已签到"


@pytest.mark.unit
def test_checkin_failure() -> None:
    outcome = classify_checkin_response({"success": False, "message": "签到功能未开启"})

    assert outcome.success is False
    assert outcome.kind == CheckinResultKind.CHECKIN_FAILED
    assert outcome.message == "签到失败: 签到功能未开启"


@pytest.mark.unit
@pytest.mark.parametrize("success_value", [1, "true", None])
def test_checkin_requires_literal_true(success_value) -> None:
    outcome = classify_checkin_response({"success": success_value, "message": "ok"})

    assert outcome.success is False
    assert outcome.kind == CheckinResultKind.CHECKIN_FAILED


@pytest.mark.unit
@pytest.mark.parametrize("payload", [None, "<html></html>", ["success"]])
def test_checkin_non_object_payload(payload) -> None:
    outcome = classify_checkin_response(payload)

    assert outcome.success is False
    assert outcome.message == "签到响应格式异常"


@pytest.mark.unit
def test_checkin_outcome_to_dict() -> None:
    outcome = classify_checkin_response({"success": True, "message": "签到成功"})

    assert outcome.to_dict() == {
        "success": True,
        "message": "签到成功: 签到成功",
        "type": "checkin_success",
    }
