import pytest

from relaydesk import create_app
from relaydesk.errors import ConfigurationError
from relaydesk.settings import Settings


@pytest.mark.unit
def test_create_app_registers_api_v1() -> None:
    app = create_app(settings=Settings.load())

    rules = {rule.rule for rule in app.url_map.iter_rules()}
    assert "/api/v1/health/ping" in rules
    assert "/api/v1/openapi.json" in rules
    assert app.config["PROVIDER_TYPES_CONFIG"].endswith("provider_types.yaml")


@pytest.mark.unit
def test_create_app_without_docs(monkeypatch) -> None:
    monkeypatch.setenv("API_V1_DOCS_ENABLED", "false")

    app = create_app(settings=Settings.load())

    assert "/api/v1/docs" not in {rule.rule for rule in app.url_map.iter_rules()}


@pytest.mark.unit
def test_create_app_fails_fast_on_invalid_sites_config(monkeypatch, tmp_path) -> None:
    sites_path = tmp_path / "sites.yaml"
    sites_path.write_text(
        "sites:\n  - provider_type: OneApi\n    name: x\n    url: https://x.example\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("SITES_CONFIG", str(sites_path))

    with pytest.raises(ConfigurationError, match="OneApi"):
        create_app(settings=Settings.load())


@pytest.mark.unit
def test_create_app_fails_fast_on_missing_provider_type(monkeypatch, tmp_path) -> None:
    config_path = tmp_path / "provider_types.yaml"
    config_path.write_text(
        "provider_types:\n  NewApi:\n    display_name: New API\n    supported_auth_methods: [token]\n"
        "    requires_user_id:\n      token: true\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("PROVIDER_TYPES_CONFIG", str(config_path))

    with pytest.raises(ConfigurationError):
        create_app(settings=Settings.load())
