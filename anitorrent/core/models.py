"""
Core Data Models - Pydantic models for type safety and validation.

This module defines the data structures used throughout AniTorrent: the raw
release records delivered by the SubsPlease feed, the normalized torrent
entity handed back to the host, the search option models and the provider
capability descriptor. Host-facing models serialize with the camelCase keys
the host expects through ``to_host_dict()``.
"""

from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


# Sentinels kept in the host wire format
UNKNOWN_EPISODE = -1
UNKNOWN_PEERS = -1

BATCH_EPISODE_LABEL = "Batch"

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class HostModel(BaseModel):
    """Base for models exchanged with the host (camelCase on the wire)."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    def to_host_dict(self) -> Dict[str, Any]:
        """Serialize using the host's field names."""
        return self.model_dump(mode="json", by_alias=True)


class RawDownload(BaseModel):
    """One quality variant of a release as delivered by the feed."""

    model_config = ConfigDict(extra="ignore")

    res: Optional[str] = Field(None, description="Quality label without unit, e.g. '1080'")
    magnet: Optional[str] = Field(None, description="Magnet URI")

    @field_validator('res', mode='before')
    @classmethod
    def coerce_res(cls, v: Any) -> Any:
        """Accept numeric quality labels."""
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v


class RawRelease(BaseModel):
    """
    Represents one release entry of the SubsPlease API payload.

    Only the fields the normalizer relies on are declared; other keys the
    feed carries (``time``, ``image_url``, ``xdcc``) are ignored.
    """

    model_config = ConfigDict(extra="ignore")

    show: str = Field(..., description="Show title")
    episode: str = Field("", description="Episode label, numeric or 'Batch'")
    downloads: List[RawDownload] = Field(..., description="Quality variants")
    release_date: Optional[str] = Field(None, description="Release timestamp, possibly unparsable")
    page: str = Field("", description="Show page slug")

    @field_validator('episode', mode='before')
    @classmethod
    def coerce_episode(cls, v: Any) -> str:
        """Numbers become labels; anything else non-textual becomes an unparsable ''."""
        if isinstance(v, str):
            return v
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return ""

    @field_validator('release_date', mode='before')
    @classmethod
    def coerce_release_date(cls, v: Any) -> Optional[str]:
        """Read numbers as epoch milliseconds; drop other non-text values."""
        if isinstance(v, str):
            return v
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            try:
                return (EPOCH + timedelta(milliseconds=v)).isoformat()
            except (OverflowError, ValueError):
                return None
        return None

    @property
    def is_batch(self) -> bool:
        """Whether this entry stands for a whole season or arc."""
        return self.episode == BATCH_EPISODE_LABEL

    def __str__(self) -> str:
        return f"{self.show} - {self.episode}"


class AnimeTorrent(HostModel):
    """
    Normalized torrent entity returned to the host.

    Sentinel values are kept as the host contract defines them: -1 for
    unknown peer counts and episode numbers, 0 for an unknown size and an
    empty string for a missing info-hash. ``episode`` and
    ``has_peer_stats`` expose them as absence on the Python side.
    """

    name: str = Field(..., description="Synthesized release name")
    date: str = Field(..., min_length=1, description="ISO-8601 release timestamp")
    size: int = Field(0, ge=0, description="Size in bytes, 0 when unknown")
    formatted_size: str = Field("N/A", description="Human-readable size")
    seeders: int = Field(UNKNOWN_PEERS, description="Seeder count, -1 when unknown")
    leechers: int = Field(UNKNOWN_PEERS, description="Leecher count, -1 when unknown")
    download_count: int = Field(0, ge=0, description="Completed download count")
    link: str = Field("", description="Release page URL")
    download_url: str = Field("", description="Direct .torrent URL")
    magnet_link: str = Field("", description="Magnet URI")
    info_hash: str = Field("", description="Upper-case info-hash")
    resolution: str = Field("", description="Resolution label, e.g. '1080p'")
    is_batch: bool = Field(False, description="Whether this is a batch release")
    episode_number: int = Field(UNKNOWN_EPISODE, ge=UNKNOWN_EPISODE, description="Episode number, -1 when unknown")
    release_group: str = Field("", description="Release group")
    is_best_release: bool = Field(False, description="Curated best release flag")
    confirmed: bool = Field(True, description="Whether the release is confirmed")

    @property
    def episode(self) -> Optional[int]:
        """Episode number, or None when the source label was unparsable."""
        if self.episode_number == UNKNOWN_EPISODE:
            return None
        return self.episode_number

    @property
    def has_peer_stats(self) -> bool:
        """Whether the provider reported seeders and leechers."""
        return self.seeders != UNKNOWN_PEERS and self.leechers != UNKNOWN_PEERS

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"AnimeTorrent(episode={self.episode_number}, resolution='{self.resolution}', info_hash='{self.info_hash}')"


class AnimeMedia(HostModel):
    """Media descriptor supplied by the host for smart searches."""

    id: int = Field(0, description="Host media identifier")
    romaji_title: Optional[str] = Field(None, description="Romaji title")
    english_title: Optional[str] = Field(None, description="English title")
    absolute_season_offset: int = Field(0, description="Offset from season to absolute numbering")


class SearchOptions(HostModel):
    """Free-text search request."""

    query: str = Field("", description="Search string")


class SmartSearchOptions(HostModel):
    """
    Structured search request.

    ``episode_number`` of 0 and an empty ``resolution`` mean the
    corresponding constraint is not applied.
    """

    media: AnimeMedia = Field(default_factory=AnimeMedia)
    query: str = Field("", description="Explicit search string")
    batch: bool = Field(False, description="Whether a batch release is wanted")
    episode_number: int = Field(0, ge=0, description="Target episode, 0 for any")
    resolution: str = Field("", description="Target resolution, '' for any")

    def effective_query(self) -> str:
        """Explicit query, falling back to the media titles."""
        return self.query or self.media.romaji_title or self.media.english_title or ""


class SmartSearchFilter(str, Enum):
    """Smart search dimensions a provider may honor."""

    BATCH = "batch"
    EPISODE_NUMBER = "episodeNumber"
    RESOLUTION = "resolution"
    QUERY = "query"
    BEST_RELEASES = "bestReleases"

    def __str__(self) -> str:
        return self.value


class ProviderType(str, Enum):
    """Provider category tag."""

    MAIN = "main"
    SPECIAL = "special"

    def __str__(self) -> str:
        return self.value


class ProviderSettings(HostModel):
    """Capability descriptor a provider declares to the host."""

    can_smart_search: bool = Field(False, description="Whether smart search is supported")
    smart_search_filters: List[SmartSearchFilter] = Field(
        default_factory=list,
        description="Smart search dimensions honored"
    )
    supports_adult: bool = Field(False, description="Whether adult content is served")
    type: ProviderType = Field(ProviderType.MAIN, description="Provider category")


# Export all models and types
__all__ = [
    "UNKNOWN_EPISODE",
    "UNKNOWN_PEERS",
    "BATCH_EPISODE_LABEL",
    "HostModel",
    "RawDownload",
    "RawRelease",
    "AnimeTorrent",
    "AnimeMedia",
    "SearchOptions",
    "SmartSearchOptions",
    "SmartSearchFilter",
    "ProviderType",
    "ProviderSettings",
]
