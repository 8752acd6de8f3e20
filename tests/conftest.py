import json
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import pytest

from anitorrent.core.transport import FetchResponse
from anitorrent.plugins.subsplease import SubsPleasePlugin


FIXED_NOW = datetime(2025, 3, 14, 12, 30, 0, tzinfo=timezone.utc)


class FakeTransport:
    """Transport double returning a canned response and recording requests."""

    def __init__(self, payload: Any = None, status: int = 200, body: Optional[bytes] = None):
        if body is None:
            body = json.dumps(payload if payload is not None else {}).encode()
        self.response = FetchResponse(status=status, body=body, url="https://subsplease.org/api/")
        self.calls: List[Dict[str, Any]] = []

    async def get(self, url: str, params: Optional[Dict[str, Any]] = None) -> FetchResponse:
        self.calls.append({"url": url, "params": dict(params or {})})
        return self.response


def make_release(
    show: str = "Sousou no Frieren",
    episode: str = "05",
    resolutions=("1080", "720", "480"),
    release_date: Optional[str] = "2024-01-01T00:00:00Z",
    page: str = "sousou-no-frieren",
) -> Dict[str, Any]:
    downloads = [
        {
            "res": res,
            "magnet": f"magnet:?xt=urn:btih:hash{show[:3].lower()}{episode}{res}&dn=x&xl={int(res) * 1048576}",
        }
        for res in resolutions
    ]
    release = {
        "time": "Friday 12:00",
        "show": show,
        "episode": episode,
        "downloads": downloads,
        "xdcc": "",
        "image_url": "/wp-content/uploads/x.jpg",
        "page": page,
    }
    if release_date is not None:
        release["release_date"] = release_date
    return release


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_NOW


@pytest.fixture
def sample_payload() -> Dict[str, Any]:
    return {
        "Sousou no Frieren - 05": make_release(episode="05"),
        "Sousou no Frieren - 17": make_release(episode="17"),
        "Sousou no Frieren - 06": make_release(episode="06"),
        "Sousou no Frieren - Batch": make_release(episode="Batch"),
    }


@pytest.fixture
def make_plugin(fixed_clock):
    def _make(payload: Any = None, status: int = 200, body: Optional[bytes] = None):
        transport = FakeTransport(payload, status=status, body=body)
        return SubsPleasePlugin(transport=transport, clock=fixed_clock), transport
    return _make
