"""API 类型与授权方式常量."""

import pytest

from relaydesk.constants import AUTH_METHODS, AuthMethodKey, ProviderTypeKey, TokenListShape
from relaydesk.constants.upstream import CheckinResultKind


@pytest.mark.unit
def test_provider_type_keys_are_closed_tuple() -> None:
    assert isinstance(ProviderTypeKey.ALL, tuple)
    assert ProviderTypeKey.ALL == ("NewApi", "Veloera", "AnyRouter", "VoApi", "HusanApi", "DoneHub")
    assert len(set(ProviderTypeKey.ALL)) == len(ProviderTypeKey.ALL)


@pytest.mark.unit
@pytest.mark.parametrize("value", ["newapi", "", None, 1, ["NewApi"], {"NewApi": 1}])
def test_provider_type_key_is_valid_rejects_unknown_and_non_string(value) -> None:
    assert ProviderTypeKey.is_valid(value) is False


@pytest.mark.unit
def test_auth_method_catalog_matches_keys() -> None:
    assert AuthMethodKey.ALL == ("sessions", "token")
    assert tuple(AUTH_METHODS) == AuthMethodKey.ALL
    assert AUTH_METHODS[AuthMethodKey.SESSIONS].display_name == "Sessions"
    assert AUTH_METHODS[AuthMethodKey.TOKEN].display_name == "Token"
    assert AuthMethodKey.is_valid("token") is True
    assert AuthMethodKey.is_valid("Token") is False


@pytest.mark.unit
def test_auth_method_catalog_is_read_only() -> None:
    with pytest.raises(TypeError):
        AUTH_METHODS["oauth"] = AUTH_METHODS["token"]  # type: ignore[index]


@pytest.mark.unit
def test_token_list_shape_tags() -> None:
    assert [shape.value for shape in TokenListShape] == ["records", "items", "nested-array", "flat-array"]


@pytest.mark.unit
def test_checkin_result_kinds_are_tuple() -> None:
    assert isinstance(CheckinResultKind.ALL, tuple)
    assert CheckinResultKind.ALREADY_CHECKED_IN in CheckinResultKind.ALL
