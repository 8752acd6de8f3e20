from datetime import datetime, timedelta, timezone

import pytest

from anitorrent.core.models import RawRelease
from anitorrent.plugins.subsplease.parser import (
    SubsPleaseParser,
    format_size,
    parse_leading_int,
    parse_release_date,
    to_iso8601,
)
from conftest import FIXED_NOW, make_release


@pytest.fixture
def parser(fixed_clock):
    return SubsPleaseParser(clock=fixed_clock)


def test_single_release_payload_yields_single_torrent(parser):
    payload = {
        "1": {
            "show": "X",
            "episode": "3",
            "downloads": [{"res": "720", "magnet": "magnet:?xt=urn:btih:HASH1&xl=500"}],
            "release_date": "2024-01-01T00:00:00Z",
            "page": "x",
        }
    }

    torrents = parser.parse_payload(payload)

    assert len(torrents) == 1
    torrent = torrents[0]
    assert torrent.episode_number == 3
    assert torrent.resolution == "720p"
    assert torrent.size == 500
    assert torrent.formatted_size == "0.00 MB"
    assert torrent.info_hash == "HASH1"
    assert torrent.name == "[SubsPlease] X - 03 (720p) [HASH1].mkv"
    assert torrent.date == "2024-01-01T00:00:00.000Z"
    assert torrent.link == "https://subsplease.org/shows/x/"


def test_release_yields_one_torrent_per_download_in_order(parser):
    release = RawRelease.model_validate(make_release(resolutions=("1080", "720", "480")))

    torrents = parser.release_to_torrents(release)

    assert [t.resolution for t in torrents] == ["1080p", "720p", "480p"]
    assert all(t.episode_number == 5 for t in torrents)


def test_constant_fields(parser):
    torrent = parser.release_to_torrents(RawRelease.model_validate(make_release()))[0]

    assert torrent.seeders == -1
    assert torrent.leechers == -1
    assert torrent.download_count == 0
    assert torrent.download_url == ""
    assert torrent.is_batch is False
    assert torrent.is_best_release is False
    assert torrent.confirmed is True
    assert torrent.release_group == "SubsPlease"
    assert not torrent.has_peer_stats


def test_batch_releases_are_dropped(parser, sample_payload):
    torrents = parser.parse_payload(sample_payload)

    assert len(torrents) == 9
    assert all("Batch" not in t.name for t in torrents)


def test_only_batch_payload_is_empty(parser):
    payload = {"a": make_release(episode="Batch"), "b": make_release(episode="Batch", show="Other")}
    assert parser.parse_payload(payload) == []


def test_empty_list_payload_is_empty(parser):
    assert parser.parse_payload([]) == []


def test_unparsable_episode_uses_sentinel(parser):
    release = RawRelease.model_validate(make_release(episode="Special"))

    torrents = parser.release_to_torrents(release)

    assert len(torrents) == 3
    assert all(t.episode_number == -1 for t in torrents)
    assert all(t.episode is None for t in torrents)
    assert torrents[0].name.startswith("[SubsPlease] Sousou no Frieren - Special (1080p)")


def test_episode_padding_does_not_truncate(parser):
    release = RawRelease.model_validate(make_release(show="One Piece", episode="1120"))
    torrent = parser.release_to_torrents(release)[0]
    assert " - 1120 (" in torrent.name
    assert torrent.episode_number == 1120


def test_revision_suffix_keeps_episode_number(parser):
    release = RawRelease.model_validate(make_release(episode="12v2"))
    assert parser.release_to_torrents(release)[0].episode_number == 12


def test_unparsable_date_falls_back_to_clock(parser):
    release = RawRelease.model_validate(make_release(release_date="not a date"))
    torrent = parser.release_to_torrents(release)[0]
    assert torrent.date == to_iso8601(FIXED_NOW)


def test_empty_date_with_real_clock_is_recent_iso8601():
    started = datetime.now(timezone.utc)
    release = RawRelease.model_validate(make_release(release_date=""))

    torrent = SubsPleaseParser().release_to_torrents(release)[0]

    parsed = datetime.fromisoformat(torrent.date.replace("Z", "+00:00"))
    assert parsed >= started - timedelta(seconds=5)


def test_missing_date_falls_back_to_clock(parser):
    release = RawRelease.model_validate(make_release(release_date=None))
    assert parser.release_to_torrents(release)[0].date == "2025-03-14T12:30:00.000Z"


def test_malformed_release_is_skipped(parser, caplog):
    payload = {
        "broken": {"show": "No Downloads", "episode": "01", "page": "nd"},
        "good": make_release(episode="02", resolutions=("1080",)),
    }

    torrents = parser.parse_payload(payload)

    assert [t.episode_number for t in torrents] == [2]
    assert "Skipping malformed release broken" in caplog.text


def test_incomplete_download_variant_is_skipped(parser):
    raw = make_release(resolutions=("1080", "720"))
    raw["downloads"].append({"res": "480"})

    torrents = parser.release_to_torrents(RawRelease.model_validate(raw))

    assert [t.resolution for t in torrents] == ["1080p", "720p"]


def test_numeric_labels_are_accepted(parser):
    raw = make_release(resolutions=("1080",))
    raw["episode"] = 7
    raw["downloads"][0]["res"] = 1080

    torrent = parser.release_to_torrents(RawRelease.model_validate(raw))[0]

    assert torrent.episode_number == 7
    assert torrent.resolution == "1080p"


@pytest.mark.parametrize(
    "value, expected",
    [
        ("2024-01-01T00:00:00Z", datetime(2024, 1, 1, tzinfo=timezone.utc)),
        ("2024-01-01T09:00:00+09:00", datetime(2024, 1, 1, tzinfo=timezone.utc)),
        ("Mon, 01 Jan 2024 00:00:00 +0000", datetime(2024, 1, 1, tzinfo=timezone.utc)),
        ("01/01/24", datetime(2024, 1, 1, tzinfo=timezone.utc)),
    ],
)
def test_parse_release_date_formats(value, expected):
    assert parse_release_date(value) == expected


@pytest.mark.parametrize("value", [None, "", "   ", "yesterday"])
def test_parse_release_date_failures(value):
    assert parse_release_date(value) is None


def test_parse_leading_int():
    assert parse_leading_int("07") == 7
    assert parse_leading_int("Batch") is None
    assert parse_leading_int("") is None


def test_format_size():
    assert format_size(0) == "N/A"
    assert format_size(1048576) == "1.00 MB"
    assert format_size(1468006400) == "1400.00 MB"


def test_numeric_release_date_is_epoch_milliseconds(parser):
    raw = make_release(resolutions=("720",))
    raw["release_date"] = 1704067200

    torrents = parser.parse_payload({"a": raw})

    assert len(torrents) == 1
    assert torrents[0].date == "1970-01-20T17:21:07.200Z"


@pytest.mark.parametrize("value", [{"unix": 1}, ["2024-01-01"], True, float("nan")])
def test_non_text_release_date_falls_back_to_clock(parser, value):
    raw = make_release(resolutions=("720",))
    raw["release_date"] = value

    torrents = parser.parse_payload({"a": raw})

    assert [t.date for t in torrents] == [to_iso8601(FIXED_NOW)]


def test_out_of_range_date_does_not_lose_other_releases(parser):
    payload = {
        "ancient": make_release(episode="01", release_date="0001-01-01T00:00:00+05:00"),
        "good": make_release(episode="02"),
    }

    torrents = parser.parse_payload(payload)

    assert len(torrents) == 6
    assert {t.date for t in torrents if t.episode_number == 1} == {to_iso8601(FIXED_NOW)}
    assert {t.date for t in torrents if t.episode_number == 2} == {"2024-01-01T00:00:00.000Z"}


@pytest.mark.parametrize("value", [None, {"n": 1}, ["05"], True])
def test_non_text_episode_gets_sentinel(parser, value):
    raw = make_release(resolutions=("1080", "720"))
    raw["episode"] = value

    torrents = parser.parse_payload({"a": raw})

    assert len(torrents) == 2
    assert all(t.episode_number == -1 for t in torrents)


def test_missing_episode_gets_sentinel(parser):
    raw = make_release(resolutions=("1080",))
    del raw["episode"]

    torrents = parser.parse_payload({"a": raw})

    assert [t.episode_number for t in torrents] == [-1]


def test_naive_dates_use_source_timezone(fixed_clock):
    tokyo = timezone(timedelta(hours=9))
    parser = SubsPleaseParser(clock=fixed_clock, source_tz=tokyo)
    release = RawRelease.model_validate(make_release(release_date="2024-01-01 09:00:00"))

    assert parser.release_to_torrents(release)[0].date == "2024-01-01T00:00:00.000Z"


def test_explicit_offset_wins_over_source_timezone():
    tokyo = timezone(timedelta(hours=9))
    parsed = parse_release_date("2024-01-01T00:00:00Z", tokyo)
    assert parsed == datetime(2024, 1, 1, tzinfo=timezone.utc)
