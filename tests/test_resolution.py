import asyncio

import pytest

from Garnish.Errors import PreconditionError, ResolutionError
from Garnish.Plugin import Plugin
from Garnish.TrackUtils import TrackUtils

from conftest import FakeManager, raw_track


def _resolve(manager, descriptor):
    TrackUtils.init(manager)
    unresolved = TrackUtils.buildUnresolved(descriptor)
    return asyncio.run(TrackUtils.getClosestTrack(unresolved))


def test_requires_initialised_manager() -> None:
    track = TrackUtils.buildUnresolved("Song")

    with pytest.raises(PreconditionError, match="not been initiated"):
        asyncio.run(TrackUtils.getClosestTrack(track))


def test_rejects_resolved_tracks(build) -> None:
    TrackUtils.init(FakeManager())

    with pytest.raises(PreconditionError):
        asyncio.run(TrackUtils.getClosestTrack(build()))


def test_query_joins_title_and_author() -> None:
    manager = FakeManager(tracks=[TrackUtils.build(raw_track())])
    _resolve(manager, {"title": "Song", "author": "Band"})
    _resolve(manager, {"title": "Only Title"})

    assert [c[1] for c in manager.calls] == ["Song by Band", "Only Title"]


def test_author_match_accepts_topic_channel(build) -> None:
    tracks = [
        build(title="Cover", author="Someone Else"),
        build(title="Live", author="Artist A - Topic"),
        build(title="Studio", author="Artist A"),
    ]

    result = _resolve(FakeManager(tracks=tracks), {"title": "Song", "author": "Artist A"})

    assert result.encodedTrack == tracks[1].encodedTrack


def test_author_match_is_case_insensitive_whole_string(build) -> None:
    tracks = [
        build(title="a", author="Artist AB"),
        build(title="b", author="artist a"),
    ]

    result = _resolve(FakeManager(tracks=tracks), {"title": "Song", "author": "Artist A"})

    assert result.encodedTrack == tracks[1].encodedTrack


def test_author_match_escapes_regex_characters(build) -> None:
    tracks = [
        build(title="a", author="AC-DC"),
        build(title="b", author="AC.DC"),
    ]

    result = _resolve(FakeManager(tracks=tracks), {"title": "Song", "author": "AC.DC"})

    assert result.encodedTrack == tracks[1].encodedTrack


def test_title_match_counts_as_author_match(build) -> None:
    tracks = [
        build(title="Other", author="X"),
        build(title="exact song", author="Y"),
    ]

    result = _resolve(FakeManager(tracks=tracks), {"title": "Exact Song", "author": "Band"})

    assert result.encodedTrack == tracks[1].encodedTrack


def test_duration_window(build) -> None:
    tracks = [
        build(title="far", author="X", length=205000),
        build(title="near", author="Y", length=198800),
    ]

    result = _resolve(FakeManager(tracks=tracks), {"title": "Song", "duration": 200000})

    assert result.encodedTrack == tracks[1].encodedTrack


def test_duration_used_when_author_does_not_match(build) -> None:
    tracks = [
        build(title="a", author="X", length=100000),
        build(title="b", author="Y", length=201500),
    ]

    result = _resolve(FakeManager(tracks=tracks), {"title": "Song", "author": "Z", "duration": 200000})

    assert result.encodedTrack == tracks[1].encodedTrack


def test_falls_back_to_first_result(build) -> None:
    tracks = [
        build(title="a", author="X", length=100000),
        build(title="b", author="Y", length=300000),
    ]

    result = _resolve(FakeManager(tracks=tracks), {"title": "Song", "duration": 200000})

    assert result.encodedTrack == tracks[0].encodedTrack


@pytest.mark.parametrize("loadType", ["SEARCH_RESULT", "search"])
def test_both_search_load_types_are_accepted(loadType, build) -> None:
    result = _resolve(FakeManager(tracks=[build()], loadType=loadType), "Song")

    assert result.encodedTrack == build().encodedTrack


@pytest.mark.parametrize("loadType", ["track", "TRACK_LOADED", "playlist", "empty", "NO_MATCHES"])
def test_other_load_types_fail(loadType, build) -> None:
    with pytest.raises(ResolutionError) as info:
        _resolve(FakeManager(tracks=[build()], loadType=loadType), "Song")

    assert info.value.message == "No tracks found."
    assert info.value.severity == "COMMON"
    assert info.value.exception is None


def test_node_exception_is_carried() -> None:
    payload = {"message": "Something broke", "severity": "fault", "cause": "java.io.IOException"}

    with pytest.raises(ResolutionError) as info:
        _resolve(FakeManager(loadType="error", exception=payload), "Song")

    assert info.value.exception == payload
    assert info.value.message == "Something broke"
    assert info.value.severity == "fault"


def test_search_without_tracks_fails() -> None:
    with pytest.raises(ResolutionError):
        _resolve(FakeManager(tracks=[]), "Song")


def test_prefer_unresolved_overwrites_fields(build) -> None:
    tracks = [build(title="Original Title", author="Band")]
    manager = FakeManager(tracks=tracks, useUnresolvedData=True)

    result = _resolve(manager, {"title": "My Title", "author": "Band",
                                "artworkUrl": "https://a/cover.png"})

    assert result.title == "My Title"
    assert result.artworkUrl == "https://a/cover.png"


def test_prefer_resolved_keeps_real_titles(build) -> None:
    tracks = [build(title="Original Title", author="Band")]

    result = _resolve(FakeManager(tracks=tracks), {"title": "My Title", "author": "Band"})

    assert result.title == "Original Title"


def test_prefer_resolved_replaces_placeholder_titles(build) -> None:
    for placeholder in ("Unknown title", "Unspecified description"):
        tracks = [build(title=placeholder, author="X")]
        result = _resolve(FakeManager(tracks=tracks), {"title": "Real", "duration": 200000})
        assert result.title == "Real"


def test_prefer_resolved_replaces_differing_author_and_artwork(build) -> None:
    tracks = [build(title="Song", author="Band - Topic", artworkUrl="https://node/art.jpg")]

    result = _resolve(FakeManager(tracks=tracks), {"title": "Song", "author": "Band",
                                                   "artworkUrl": "https://mine/art.jpg"})

    assert result.author == "Band"
    assert result.artworkUrl == "https://mine/art.jpg"


def test_missing_unresolved_values_never_erase(build) -> None:
    tracks = [build(title="Song", author="Band", artworkUrl="https://node/art.jpg")]

    result = _resolve(FakeManager(tracks=tracks), "Song")

    assert result.author == "Band"
    assert result.artworkUrl == "https://node/art.jpg"


def test_unresolved_uri_is_authoritative_and_fields_backfilled(build) -> None:
    TrackUtils.setTrackPartial(["title"])
    tracks = [build(title="Song")]

    result = _resolve(FakeManager(tracks=tracks), {"title": "Song", "author": "Band",
                                                   "uri": "https://open.spotify.com/track/1",
                                                   "isrc": "US123"})

    assert result.uri == "https://open.spotify.com/track/1"
    assert result.author == "Band"
    assert result.isrc == "US123"
    assert not hasattr(type(result), "resolve")


def test_valid_uri_is_searched_directly(build) -> None:
    manager = FakeManager(tracks=[build()])
    uri = "https://www.youtube.com/watch?v=abc"

    _resolve(manager, {"title": "Song", "uri": uri})

    assert manager.calls[0][1] == uri


def test_custom_valid_uris_are_honoured(build) -> None:
    manager = FakeManager(tracks=[build()], validUnresolvedUris=["bandcamp.com"])

    _resolve(manager, {"title": "Song", "uri": "https://band.bandcamp.com/track/x"})
    _resolve(manager, {"title": "Song", "uri": "https://open.spotify.com/track/1"})

    assert [c[1] for c in manager.calls] == ["https://band.bandcamp.com/track/x", "Song"]


def test_plugin_sources_fall_back_to_text_search(build) -> None:
    class Soundcloud(Plugin):
        pass

    manager = FakeManager(tracks=[build()], plugins=[Soundcloud()])

    _resolve(manager, {"title": "Song", "uri": "https://soundcloud.com/a/b"})

    assert manager.calls[0][1] == "Song"


def test_plugin_claims_pattern_uses_type_name() -> None:
    class Deezer(Plugin):
        pass

    assert TrackUtils.pluginClaimsPattern(Deezer(), "www.Deezer.com")
    assert not TrackUtils.pluginClaimsPattern(Deezer(), "soundcloud.com")


def test_local_tracks_use_search_local(build) -> None:
    local = build(title="Unknown title", author="unknown", uri="file:///a.mp3")
    manager = FakeManager(localTracks=[local])

    result = _resolve(manager, {"title": "Track 1", "author": "Me", "uri": "/music/a.mp3", "local": True})

    assert manager.calls == [("searchLocal", "/music/a.mp3", None)]
    assert result.uri == "/music/a.mp3"
    assert result.title == "Track 1"
    assert result.author == "Me"
    assert result.local is True


def test_target_node_is_forwarded(build) -> None:
    manager = FakeManager(tracks=[build()])
    TrackUtils.init(manager)
    node = object()

    asyncio.run(TrackUtils.getClosestTrack(TrackUtils.buildUnresolved("Song"), node))

    assert manager.calls[0][2] is node
