import pytest
from pydantic import ValidationError

from relaydesk.schemas.yaml_configs import ProviderTypeConfig, ProviderTypesConfigFile, SiteConfig, SitesConfigFile


@pytest.mark.unit
def test_provider_type_config_accepts_camel_case() -> None:
    config = ProviderTypeConfig.model_validate(
        {
            "displayName": " AnyRouter ",
            "supportedAuthMethods": ["sessions"],
            "requiresUserId": {"sessions": True},
            "defaultAutoCheckin": True,
            "userIdHeader": "New-Api-User",
            "checkinPath": "/api/user/sign_in",
        },
    )

    assert config.display_name == "AnyRouter"
    assert config.supported_auth_methods == ("sessions",)
    assert config.requires_user_id == {"sessions": True}
    assert config.default_auto_checkin is True
    assert config.user_id_header == "new-api-user"
    assert config.checkin_path == "/api/user/sign_in"
    assert config.description == ""


@pytest.mark.unit
@pytest.mark.parametrize(
    "supported_auth_methods",
    [[], "token", ["token", "token"], ["token", " "]],
)
def test_provider_type_config_rejects_bad_method_lists(supported_auth_methods) -> None:
    with pytest.raises(ValidationError):
        ProviderTypeConfig.model_validate(
            {"display_name": "X", "supported_auth_methods": supported_auth_methods},
        )


@pytest.mark.unit
def test_provider_type_config_requires_boolean_flags() -> None:
    with pytest.raises(ValidationError, match="布尔值"):
        ProviderTypeConfig.model_validate(
            {"display_name": "X", "supported_auth_methods": ["token"], "requires_user_id": {"token": "yes"}},
        )


@pytest.mark.unit
def test_provider_type_config_rejects_relative_checkin_path() -> None:
    with pytest.raises(ValidationError, match="checkin_path"):
        ProviderTypeConfig.model_validate(
            {"display_name": "X", "supported_auth_methods": ["token"], "checkin_path": "api/user/checkin"},
        )


@pytest.mark.unit
def test_provider_types_file_requires_mapping_root() -> None:
    with pytest.raises(ValidationError, match="YAML mapping"):
        ProviderTypesConfigFile.model_validate(["NewApi"])


@pytest.mark.unit
def test_provider_types_file_strips_keys() -> None:
    config = ProviderTypesConfigFile.model_validate(
        {"provider_types": {" DoneHub ": {"display_name": "DoneHub", "supported_auth_methods": ["token"]}}},
    )

    assert list(config.provider_types) == ["DoneHub"]


@pytest.mark.unit
def test_site_config_normalizes_url_and_aliases() -> None:
    site = SiteConfig.model_validate(
        {"apiType": "NewApi", "name": "Demo", "url": " https://demo.example/ ", "affiliatePath": "/register?aff=1"},
    )

    assert site.provider_type == "NewApi"
    assert site.url == "https://demo.example"
    assert site.affiliate_path == "/register?aff=1"
    assert site.default is False


@pytest.mark.unit
@pytest.mark.parametrize("url", ["", "demo.example", "ftp://demo.example", None])
def test_site_config_rejects_invalid_url(url) -> None:
    with pytest.raises(ValidationError):
        SiteConfig.model_validate({"provider_type": "NewApi", "name": "Demo", "url": url})


@pytest.mark.unit
def test_sites_file_defaults_to_empty_list() -> None:
    assert SitesConfigFile.model_validate({}).sites == []
