"""已知站点目录."""

import pytest

from relaydesk.errors import ConfigurationError
from relaydesk.services.sites.site_directory import SiteDirectory, get_site_directory


@pytest.mark.unit
def test_directory_loads_all_sites(directory) -> None:
    assert len(directory) == 26
    assert len(directory.all_sites()) == 26
    assert list(directory) == list(directory.all_sites())


@pytest.mark.unit
def test_get_site_directory_is_cached() -> None:
    assert get_site_directory() is get_site_directory()


@pytest.mark.unit
def test_every_site_references_registered_provider(directory, registry) -> None:
    for site in directory:
        assert registry.is_valid_provider_type(site.provider_type)


@pytest.mark.unit
def test_list_by_provider_type_counts(directory) -> None:
    assert len(directory.list_by_provider_type("NewApi")) == 14
    assert len(directory.list_by_provider_type("Veloera")) == 8
    assert len(directory.list_by_provider_type("AnyRouter")) == 1
    assert [site.name for site in directory.list_by_provider_type("DoneHub")] == ["有间公益"]


@pytest.mark.unit
@pytest.mark.parametrize("provider_key", ["Unknown", "", "newapi", None, 42])
def test_list_by_unknown_provider_type_is_empty(directory, provider_key) -> None:
    assert directory.list_by_provider_type(provider_key) == ()


@pytest.mark.unit
def test_list_by_provider_type_keeps_declaration_order(directory) -> None:
    names = [site.name for site in directory.list_by_provider_type("NewApi")]

    assert names[:3] == ["InstCopilot", "ClaudeHub", "红石API"]


@pytest.mark.unit
def test_provider_types_in_first_seen_order(directory) -> None:
    assert directory.provider_types() == ("NewApi", "Veloera", "AnyRouter", "HusanApi", "DoneHub", "VoApi")


@pytest.mark.unit
def test_search_is_case_insensitive_across_fields(directory) -> None:
    by_type = directory.search("VELOERA")
    by_url = directory.search("ANYROUTER.TOP")

    assert len(by_type) == 8
    assert all(site.provider_type == "Veloera" for site in by_type)
    assert [site.name for site in by_url] == ["AnyRouter"]


@pytest.mark.unit
def test_search_matches_name_substring(directory) -> None:
    names = {site.name for site in directory.search("公益")}

    assert names == {"Kyx公益站", "猫猫公益", "波波公益站", "23公益站", "小明公益站", "CTW公益", "有间公益", "公益站"}


@pytest.mark.unit
@pytest.mark.parametrize("keyword", [None, "", "   "])
def test_blank_search_returns_all_sites(directory, keyword) -> None:
    assert directory.search(keyword) == directory.all_sites()


@pytest.mark.unit
def test_search_strips_keyword(directory) -> None:
    assert directory.search("  instcopilot  ") == directory.search("instcopilot")
    assert len(directory.search("instcopilot")) == 1


@pytest.mark.unit
def test_search_without_match_is_empty(directory) -> None:
    assert directory.search("no-such-site") == ()


@pytest.mark.unit
def test_default_site_per_provider_type(directory) -> None:
    assert directory.get_default_for_type("NewApi").name == "InstCopilot"
    assert directory.get_default_for_type("Veloera").name == "Veloera Zone"
    assert directory.get_default_for_type("VoApi").url == "https://api.zhongruanapi.dpdns.org"


@pytest.mark.unit
@pytest.mark.parametrize("provider_key", ["Unknown", None])
def test_default_site_for_unknown_type_is_none(directory, provider_key) -> None:
    assert directory.get_default_for_type(provider_key) is None


@pytest.mark.unit
def test_site_registration_url(directory) -> None:
    site = directory.get_default_for_type("NewApi")

    assert site.registration_url == "https://instcopilot-api.com/register?aff=xFc4"
    assert site.to_dict() == {
        "provider_type": "NewApi",
        "name": "InstCopilot",
        "url": "https://instcopilot-api.com",
        "affiliate_path": "/register?aff=xFc4",
        "registration_url": "https://instcopilot-api.com/register?aff=xFc4",
        "is_default": True,
    }


@pytest.mark.unit
def test_directory_rejects_unknown_provider_type(raw_sites_config, registry) -> None:
    raw_sites_config["sites"].append({"provider_type": "OneApi", "name": "x", "url": "https://x.example"})

    with pytest.raises(ConfigurationError, match="OneApi"):
        SiteDirectory.from_mapping(raw_sites_config, registry)


@pytest.mark.unit
def test_directory_rejects_second_default_for_same_type(raw_sites_config, registry) -> None:
    raw_sites_config["sites"].append(
        {"provider_type": "NewApi", "name": "Another", "url": "https://another.example", "default": True},
    )

    with pytest.raises(ConfigurationError, match="多个默认站点"):
        SiteDirectory.from_mapping(raw_sites_config, registry)


@pytest.mark.unit
def test_directory_rejects_invalid_url(raw_sites_config, registry) -> None:
    raw_sites_config["sites"][0]["url"] = "ftp://instcopilot-api.com"

    with pytest.raises(ConfigurationError, match="站点目录配置校验失败"):
        SiteDirectory.from_mapping(raw_sites_config, registry)


@pytest.mark.unit
def test_directory_accepts_camel_case_keys(registry) -> None:
    directory = SiteDirectory.from_mapping(
        {"sites": [{"providerType": "DoneHub", "name": " Demo ", "url": "https://demo.example/", "aff": "/r"}]},
        registry,
    )

    site = directory.all_sites()[0]
    assert (site.provider_type, site.name, site.url, site.affiliate_path) == ("DoneHub", "Demo", "https://demo.example", "/r")
    assert directory.get_default_for_type("DoneHub") is None


@pytest.mark.unit
def test_directory_missing_file(tmp_path, registry) -> None:
    with pytest.raises(ConfigurationError, match="配置文件不存在"):
        SiteDirectory.from_config_file(tmp_path / "sites.yaml", registry)


@pytest.mark.unit
def test_directory_from_config_file(tmp_path, registry) -> None:
    config_path = tmp_path / "sites.yaml"
    config_path.write_text(
        "sites:\n  - provider_type: VoApi\n    name: 测试\n    url: https://vo.example\n    default: true\n",
        encoding="utf-8",
    )

    directory = SiteDirectory.from_config_file(config_path, registry)

    assert len(directory) == 1
    assert directory.get_default_for_type("VoApi").name == "测试"
