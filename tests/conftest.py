import sys
from pathlib import Path

import pytest


# Ensure tests can import the package regardless of how pytest is invoked.
ROOT = Path(__file__).resolve().parents[1]
ROOT_STR = str(ROOT)
if ROOT_STR not in sys.path:
    sys.path.insert(0, ROOT_STR)

from Garnish.TrackUtils import TrackUtils  # noqa: E402


def raw_track(title="Song", author="Artist", length=200000, uri=None,
              identifier="abc123", encoded=None, **info):
    return {
        "encoded": encoded or f"enc-{title}-{author}-{length}",
        "info": {
            "title": title,
            "author": author,
            "length": length,
            "identifier": identifier,
            "isSeekable": True,
            "isStream": False,
            "uri": uri if uri is not None else f"https://example.com/{identifier}",
            "sourceName": "http",
            **info,
        },
        "pluginInfo": {},
    }


class FakeManager:
    """Stands in for Manager.search / searchLocal / options."""

    def __init__(self, tracks=None, loadType="search", exception=None,
                 localTracks=None, **options):
        self.options = {
            "useUnresolvedData": False,
            "validUnresolvedUris": [],
            "plugins": [],
            **options,
        }
        self.tracks = tracks or []
        self.loadType = loadType
        self.exception = exception
        self.localTracks = localTracks or []
        self.calls = []

    async def search(self, query, requester=None, node=None):
        self.calls.append(("search", query, node))
        return {"loadType": self.loadType, "exception": self.exception, "tracks": self.tracks}

    async def searchLocal(self, uri, requester=None, node=None):
        self.calls.append(("searchLocal", uri, node))
        return {"loadType": "track", "tracks": self.localTracks}


@pytest.fixture(autouse=True)
def reset_track_utils():
    yield
    TrackUtils.manager = None
    TrackUtils.trackPartial = None


@pytest.fixture
def build():
    def _build(**kwargs):
        return TrackUtils.build(raw_track(**kwargs))
    return _build
