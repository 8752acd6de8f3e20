"""
SubsPlease Data Parser

This module turns the SubsPlease API payload into normalized
``AnimeTorrent`` entities: one entity per quality variant of every
non-batch release, in payload order.
"""

import logging
import re
from datetime import datetime, timezone, tzinfo
from email.utils import parsedate_to_datetime
from typing import Any, Callable, List, Optional, Union

from pydantic import ValidationError

from anitorrent.core.models import BATCH_EPISODE_LABEL, UNKNOWN_EPISODE, AnimeTorrent, RawDownload, RawRelease
from .config import RELEASE_GROUP, resolve_timezone
from .magnet import parse_magnet


logger = logging.getLogger(__name__)


Clock = Callable[[], datetime]

CONTAINER_EXTENSION = ".mkv"
BYTES_PER_MB = 1024 * 1024

_LEADING_INT_RE = re.compile(r'\s*(\d+)')
_DATE_FORMATS = ("%m/%d/%y", "%m/%d/%Y", "%Y-%m-%d %H:%M:%S")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def parse_leading_int(value: Any) -> Optional[int]:
    """
    Parse the integer a label starts with.

    '07' -> 7, '12v2' -> 12, '1080' -> 1080; labels without leading digits
    give None.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if not isinstance(value, str):
        return None
    match = _LEADING_INT_RE.match(value)
    return int(match.group(1)) if match else None


def parse_release_date(value: Optional[str], default_tz: tzinfo = timezone.utc) -> Optional[datetime]:
    """
    Parse a feed timestamp into an aware datetime.

    ISO-8601, RFC 2822 and a few date-only layouts are accepted. Naive
    values are taken to be in ``default_tz``, the zone the API reports in.
    """
    if not isinstance(value, str) or not value.strip():
        return None

    text = value.strip()
    parsed: Optional[datetime] = None

    try:
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        pass

    if parsed is None:
        try:
            parsed = parsedate_to_datetime(text)
        except (TypeError, ValueError, IndexError):
            parsed = None

    if parsed is None:
        for fmt in _DATE_FORMATS:
            try:
                parsed = datetime.strptime(text, fmt)
                break
            except ValueError:
                continue

    if parsed is None:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=default_tz)
    return parsed


def to_iso8601(value: datetime) -> str:
    """Render as UTC with millisecond precision, e.g. 2024-01-01T00:00:00.000Z."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def format_size(size: int) -> str:
    """Size label in megabytes, or 'N/A' when the size is unknown."""
    if size > 0:
        return f"{size / BYTES_PER_MB:.2f} MB"
    return "N/A"


class SubsPleaseParser:
    """Parser for SubsPlease API responses."""

    def __init__(
        self,
        site_base_url: str = "https://subsplease.org",
        release_group: str = RELEASE_GROUP,
        clock: Clock = utc_now,
        source_tz: Union[str, tzinfo] = timezone.utc,
    ):
        """
        Initialize parser.

        Args:
            site_base_url: Base URL for show page links
            release_group: Group label embedded in names
            clock: Source of the current time for unparsable release dates
            source_tz: Zone the feed reports naive timestamps in (name or tzinfo)
        """
        self.shows_url = f"{site_base_url.rstrip('/')}/shows/"
        self.release_group = release_group
        self.clock = clock
        self.source_tz = resolve_timezone(source_tz) if isinstance(source_tz, str) else source_tz

    def parse_payload(self, payload: Any) -> List[AnimeTorrent]:
        """
        Normalize a whole API payload.

        Args:
            payload: Decoded JSON, a mapping of release id to release record

        Returns:
            Torrents of all non-batch releases, in payload order
        """
        torrents: List[AnimeTorrent] = []

        # The API answers an empty list when nothing matches
        if not isinstance(payload, dict):
            logger.debug(f"Payload is {type(payload).__name__}, not a release mapping")
            return torrents

        for key, raw in payload.items():
            if isinstance(raw, dict) and raw.get("episode") == BATCH_EPISODE_LABEL:
                logger.debug(f"Skipping batch release {key}")
                continue

            try:
                release = RawRelease.model_validate(raw)
            except ValidationError as e:
                logger.warning(f"Skipping malformed release {key}: {e.error_count()} validation error(s)")
                logger.debug(f"Release data that failed: {raw!r}")
                continue

            if release.is_batch:
                continue

            torrents.extend(self.release_to_torrents(release))

        logger.debug(f"Parsed {len(torrents)} torrents from {len(payload)} releases")
        return torrents

    def release_to_torrents(self, release: RawRelease, now: Optional[datetime] = None) -> List[AnimeTorrent]:
        """
        Normalize one release into a torrent per quality variant.

        Args:
            release: Validated release record
            now: Fallback timestamp; the parser's clock is used when omitted

        Returns:
            Torrents in the release's download order
        """
        episode_number = parse_leading_int(release.episode)
        episode_label = f"{episode_number:02d}" if episode_number is not None else release.episode

        date = self._release_timestamp(release, now)

        link = f"{self.shows_url}{release.page}/"

        torrents: List[AnimeTorrent] = []
        for download in release.downloads:
            if not self._is_usable(download):
                logger.warning(f"Skipping incomplete download variant of {release}: {download!r}")
                continue

            resolution = f"{download.res}p"
            magnet = parse_magnet(download.magnet)
            name = (
                f"[{self.release_group}] {release.show} - {episode_label} "
                f"({resolution}) [{magnet.info_hash}]{CONTAINER_EXTENSION}"
            )

            torrents.append(AnimeTorrent(
                name=name,
                date=date,
                size=magnet.size,
                formatted_size=format_size(magnet.size),
                link=link,
                download_url="",
                magnet_link=download.magnet,
                info_hash=magnet.info_hash,
                resolution=resolution,
                is_batch=False,
                episode_number=episode_number if episode_number is not None else UNKNOWN_EPISODE,
                release_group=self.release_group,
                is_best_release=False,
                confirmed=True,
            ))

        return torrents

    def _release_timestamp(self, release: RawRelease, now: Optional[datetime]) -> str:
        released_at = parse_release_date(release.release_date, self.source_tz)
        if released_at is not None:
            try:
                return to_iso8601(released_at)
            except (OverflowError, ValueError):
                pass

        logger.debug(f"Unusable release date {release.release_date!r} for {release}, using current time")
        return to_iso8601(now or self.clock())

    @staticmethod
    def _is_usable(download: RawDownload) -> bool:
        return bool(download.res) and isinstance(download.magnet, str)


__all__ = [
    "SubsPleaseParser",
    "parse_leading_int",
    "parse_release_date",
    "to_iso8601",
    "format_size",
    "utc_now",
]
