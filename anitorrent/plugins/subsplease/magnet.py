"""
Magnet helpers for the SubsPlease feed.

Only the info-hash and the declared byte size are read from a magnet URI;
anything else in it is passed through untouched.
"""

import re
from typing import NamedTuple, Optional


_BTIH_RE = re.compile(r'btih:([a-zA-Z0-9]+)')
_XL_RE = re.compile(r'xl=(\d+)')


class MagnetInfo(NamedTuple):
    info_hash: str
    size: int


def get_hash_from_magnet(magnet: Optional[str]) -> str:
    """Upper-cased token after ``btih:``, or '' when there is none."""
    if not isinstance(magnet, str):
        return ""
    match = _BTIH_RE.search(magnet)
    return match.group(1).upper() if match else ""


def get_size_from_magnet(magnet: Optional[str]) -> int:
    """Byte size declared by the ``xl=`` parameter, or 0."""
    if not isinstance(magnet, str):
        return 0
    match = _XL_RE.search(magnet)
    return int(match.group(1)) if match else 0


def parse_magnet(magnet: Optional[str]) -> MagnetInfo:
    """
    Extract info-hash and size from a magnet URI.

    Missing tokens are not errors: they come back as '' and 0.

    >>> parse_magnet("magnet:?xt=urn:btih:abcd1234&xl=1048576")
    MagnetInfo(info_hash='ABCD1234', size=1048576)
    """
    return MagnetInfo(get_hash_from_magnet(magnet), get_size_from_magnet(magnet))


__all__ = ["MagnetInfo", "parse_magnet", "get_hash_from_magnet", "get_size_from_magnet"]
