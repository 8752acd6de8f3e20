"""
Smart search filtering for normalized SubsPlease results.

All functions here are pure: they never mutate the torrents they receive
and always preserve the relative order of the input.
"""

import logging
from typing import Iterable, List, Optional

from anitorrent.core.models import AnimeTorrent
from .parser import parse_leading_int


logger = logging.getLogger(__name__)


def parse_resolution(label: Optional[str]) -> Optional[int]:
    """'1080p' -> 1080; None when the label holds no number."""
    if not isinstance(label, str):
        return None
    return parse_leading_int(label.replace("p", ""))


def filter_by_episode(
    torrents: Iterable[AnimeTorrent],
    episode_number: int,
    absolute_offset: int = 0,
) -> List[AnimeTorrent]:
    """Keep non-batch torrents numbered either as in the season or absolutely."""
    absolute_episode = absolute_offset + episode_number
    return [
        t for t in torrents
        if not t.is_batch and t.episode_number in (episode_number, absolute_episode)
    ]


def filter_by_resolution(torrents: Iterable[AnimeTorrent], resolution: str) -> List[AnimeTorrent]:
    """
    Keep torrents whose resolution equals ``resolution`` numerically.

    A target without a number leaves the input unfiltered; torrents whose
    own label has no number never match.
    """
    torrents = list(torrents)
    target = parse_resolution(resolution)
    if target is None:
        logger.debug(f"Ignoring unparsable resolution constraint {resolution!r}")
        return torrents

    return [t for t in torrents if parse_resolution(t.resolution) == target]


def apply_smart_filter(
    torrents: Iterable[AnimeTorrent],
    episode_number: int = 0,
    absolute_offset: int = 0,
    resolution: str = "",
    batch: bool = False,
) -> List[AnimeTorrent]:
    """
    Narrow a result set to the requested episode and resolution.

    Args:
        torrents: Normalized result set
        episode_number: Target episode, 0 for no constraint
        absolute_offset: Added to the target to get the absolute episode
        resolution: Target resolution such as '1080p', '' for no constraint
        batch: Whether a batch release was requested

    Returns:
        Matching torrents; always empty when ``batch`` is set, since the
        per-episode feed cannot represent batch releases reliably
    """
    if batch:
        return []

    filtered = list(torrents)

    if episode_number > 0:
        filtered = filter_by_episode(filtered, episode_number, absolute_offset)

    if resolution:
        filtered = filter_by_resolution(filtered, resolution)

    return filtered


__all__ = ["apply_smart_filter", "filter_by_episode", "filter_by_resolution", "parse_resolution"]
