import pytest

from anitorrent.core.exceptions import FetchFailure, PluginError
from anitorrent.core.models import (
    AnimeMedia,
    AnimeTorrent,
    SearchOptions,
    SmartSearchFilter,
    SmartSearchOptions,
)
from anitorrent.plugins.subsplease import SubsPleasePlugin
from conftest import make_release


def test_capability_descriptor():
    settings = SubsPleasePlugin().get_settings()

    assert settings.can_smart_search is True
    assert settings.smart_search_filters == [SmartSearchFilter.EPISODE_NUMBER, SmartSearchFilter.RESOLUTION]
    assert settings.supports_adult is False
    assert settings.to_host_dict() == {
        "canSmartSearch": True,
        "smartSearchFilters": ["episodeNumber", "resolution"],
        "supportsAdult": False,
        "type": "main",
    }


@pytest.mark.asyncio
async def test_get_latest_uses_empty_query(make_plugin, sample_payload):
    plugin, transport = make_plugin(sample_payload)

    torrents = await plugin.get_latest()

    assert len(torrents) == 9
    assert transport.calls == [{
        "url": "https://subsplease.org/api/",
        "params": {"f": "search", "tz": "UTC", "s": ""},
    }]


@pytest.mark.asyncio
async def test_search_passes_query_and_returns_full_set(make_plugin, sample_payload):
    plugin, transport = make_plugin(sample_payload)

    by_string = await plugin.search("frieren")
    by_options = await plugin.search(SearchOptions(query="frieren"))

    assert len(by_string) == len(by_options) == 9
    assert [call["params"]["s"] for call in transport.calls] == ["frieren", "frieren"]


@pytest.mark.asyncio
async def test_search_with_no_results(make_plugin):
    plugin, _ = make_plugin([])
    assert await plugin.search("nothing matches") == []


@pytest.mark.asyncio
async def test_non_success_status_raises_fetch_failure(make_plugin):
    plugin, _ = make_plugin(status=503, body=b"Service Unavailable")

    with pytest.raises(FetchFailure) as exc_info:
        await plugin.search("frieren")

    assert exc_info.value.status_code == 503


@pytest.mark.asyncio
async def test_invalid_json_raises_plugin_error(make_plugin):
    plugin, _ = make_plugin(body=b"<html>maintenance</html>")

    with pytest.raises(PluginError):
        await plugin.get_latest()


@pytest.mark.asyncio
async def test_smart_search_filters_episode_and_resolution(make_plugin, sample_payload):
    plugin, _ = make_plugin(sample_payload)
    options = SmartSearchOptions(
        media=AnimeMedia(romaji_title="Sousou no Frieren", absolute_season_offset=12),
        episode_number=5,
        resolution="1080p",
    )

    torrents = await plugin.smart_search(options)

    assert [(t.episode_number, t.resolution) for t in torrents] == [(5, "1080p"), (17, "1080p")]


@pytest.mark.asyncio
async def test_smart_search_batch_skips_network(make_plugin, sample_payload):
    plugin, transport = make_plugin(sample_payload)

    torrents = await plugin.smart_search(SmartSearchOptions(query="frieren", batch=True))

    assert torrents == []
    assert transport.calls == []


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "options, expected_query",
    [
        (SmartSearchOptions(query="explicit", media=AnimeMedia(romaji_title="Romaji")), "explicit"),
        (SmartSearchOptions(media=AnimeMedia(romaji_title="Romaji", english_title="English")), "Romaji"),
        (SmartSearchOptions(media=AnimeMedia(english_title="English")), "English"),
        (SmartSearchOptions(), ""),
    ],
)
async def test_smart_search_query_fallback(make_plugin, options, expected_query):
    plugin, transport = make_plugin({})

    await plugin.smart_search(options)

    assert transport.calls[0]["params"]["s"] == expected_query


@pytest.mark.asyncio
async def test_smart_search_without_constraints_returns_everything(make_plugin, sample_payload):
    plugin, _ = make_plugin(sample_payload)
    torrents = await plugin.smart_search(SmartSearchOptions(query="frieren"))
    assert len(torrents) == 9


@pytest.mark.asyncio
async def test_get_magnet_link(make_plugin):
    plugin, _ = make_plugin({"1": make_release(resolutions=("720",))})
    torrent = (await plugin.get_latest())[0]

    assert await plugin.get_magnet_link(torrent) == torrent.magnet_link
    assert torrent.magnet_link.startswith("magnet:?xt=urn:btih:")

    bare = AnimeTorrent(name="x", date="2024-01-01T00:00:00.000Z")
    assert await plugin.get_magnet_link(bare) == ""


@pytest.mark.asyncio
async def test_results_are_fresh_per_call(make_plugin, sample_payload):
    plugin, _ = make_plugin(sample_payload)

    first = await plugin.get_latest()
    second = await plugin.get_latest()

    assert first == second
    assert all(a is not b for a, b in zip(first, second))


def test_invalid_config_falls_back_to_defaults():
    plugin = SubsPleasePlugin(config={"timeout": 1})
    assert plugin.plugin_config.timeout == 30
    assert plugin.api.base_url == "https://subsplease.org/api/"


def test_custom_config_reaches_api_and_parser():
    plugin = SubsPleasePlugin(config={
        "api_base_url": "https://mirror.example/api/",
        "site_base_url": "https://mirror.example",
        "timezone": "Asia/Tokyo",
    })
    assert plugin.api.base_url == "https://mirror.example/api/"
    assert plugin.api.timezone == "Asia/Tokyo"
    assert plugin.parser.shows_url == "https://mirror.example/shows/"
    assert str(plugin.parser.source_tz) == "Asia/Tokyo"


def test_unknown_timezone_falls_back_to_defaults():
    plugin = SubsPleasePlugin(config={"timezone": "Mars/Olympus_Mons"})
    assert plugin.api.timezone == "UTC"


@pytest.mark.asyncio
async def test_context_manager_cleans_up_owned_transport():
    async with SubsPleasePlugin() as plugin:
        session = plugin.transport.session
    assert session.closed
