"""DO WHAT THE FUCK YOU WANT TO PUBLIC LICENSE
                    Version 2, December 2004

 Copyright (C) 2004 Sam Hocevar <sam@hocevar.net>

 Everyone is permitted to copy and distribute verbatim or modified
 copies of this license document, and changing it is allowed as long
 as the name is changed.

            DO WHAT THE FUCK YOU WANT TO PUBLIC LICENSE
   TERMS AND CONDITIONS FOR COPYING, DISTRIBUTION AND MODIFICATION

  0. You just DO WHAT THE FUCK YOU WANT TO.

URL: https://www.wtfpl.net/txt/copying/
"""
from typing import Any, Iterable, List, Mapping, Optional, Union
from urllib.parse import urlparse
import logging
import re

from .Errors import BuildError, PreconditionError, ResolutionError
from .LoadTypes import SEARCH_LOAD_TYPES
from .Track import ResolvedTrack, UnresolvedTrack

__all__ = ('TrackUtils', 'PLACEHOLDER_TITLES', 'DEFAULT_VALID_URIS',
           'DURATION_TOLERANCE')

logger = logging.getLogger(__name__)

# Titles some sources report when the real one is unknown
PLACEHOLDER_TITLES = ('Unknown title', 'Unspecified description')

DEFAULT_VALID_URIS = ('www.youtu', 'music.youtu', 'soundcloud.com')

DURATION_TOLERANCE = 1500  # ms

YOUTUBE_HOSTS = ('youtube.', 'youtu.be')
YOUTUBE_ARTWORK = 'https://img.youtube.com/vi/{identifier}/mqdefault.jpg'
DEEZER_ARTWORK = 'https://cdns-images.dzcdn.net/images/cover/{md5}/500x500.jpg'


def _host(uri: Any) -> str:
    if not isinstance(uri, str) or not uri:
        return ''
    try:
        return (urlparse(uri).netloc or '').lower()
    except ValueError:
        return ''


def _sameText(pattern: Optional[str], value: Any) -> bool:
    """Whole-string, case-insensitive comparison."""
    if not pattern or not isinstance(value, str):
        return False
    return re.fullmatch(re.escape(pattern), value, re.IGNORECASE) is not None


class TrackUtils:
    """Builds tracks from node data and resolves unresolved tracks."""

    manager = None
    trackPartial: Optional[List[str]] = None

    @classmethod
    def init(cls, manager) -> None:
        cls.manager = manager

    @classmethod
    def setTrackPartial(cls, partial: Optional[Iterable[str]]) -> None:
        """Restrict built tracks to the given fields; ``encodedTrack`` always stays."""
        if partial is None:
            cls.trackPartial = None
            return

        if isinstance(partial, str) or not all(isinstance(f, str) for f in partial):
            raise PreconditionError('Provided partial is not a list of strings.')

        partial = list(partial)
        if 'encodedTrack' not in partial:
            partial.insert(0, 'encodedTrack')
        cls.trackPartial = partial

    @staticmethod
    def validate(trackOrTracks) -> bool:
        """Check a track, or every track of a list, is either variant."""
        if trackOrTracks is None:
            raise PreconditionError('Provided argument must be present.')

        if isinstance(trackOrTracks, (list, tuple)):
            return all(isinstance(t, (ResolvedTrack, UnresolvedTrack)) for t in trackOrTracks)
        return isinstance(trackOrTracks, (ResolvedTrack, UnresolvedTrack))

    @staticmethod
    def isUnresolvedTrack(track) -> bool:
        if track is None:
            raise PreconditionError('Provided argument must be present.')
        return isinstance(track, UnresolvedTrack)

    @staticmethod
    def isTrack(track) -> bool:
        if track is None:
            raise PreconditionError('Provided argument must be present.')
        return isinstance(track, ResolvedTrack)

    @staticmethod
    def _artworkUrl(info: Mapping[str, Any]) -> Optional[str]:
        for key in ('artworkUrl', 'thumbnail', 'image'):
            if isinstance(info.get(key), str):
                return info[key]

        host = _host(info.get('uri'))
        if any(d in host for d in YOUTUBE_HOSTS):
            return YOUTUBE_ARTWORK.format(identifier=info.get('identifier'))
        if info.get('md5_image') and 'deezer' in host:
            return DEEZER_ARTWORK.format(md5=info['md5_image'])
        return None

    @classmethod
    def build(cls, data: Optional[Mapping[str, Any]], requester: Any = None) -> ResolvedTrack:
        """
        Build a ``ResolvedTrack`` from raw node data.

        Accepts Lavalink v4 (``encoded``) and v3 (``track``) payloads as well
        as already normalised ones (``encodedTrack``). Every ``info`` key is
        kept, then the canonical fields are laid over them.
        """
        if data is None:
            raise BuildError('Argument "data" must be present.')

        try:
            encoded = data.get('encodedTrack') or data.get('encoded') or data.get('track')
        except AttributeError as e:
            raise BuildError(f'Argument "data" is not a valid track: {e}') from e
        if not encoded:
            raise BuildError('Argument "data.encodedTrack" must be present.')

        try:
            info = data.get('info') or {}
            fields = dict(info)
            fields.update(
                encodedTrack=encoded,
                title=info.get('title'),
                identifier=info.get('identifier'),
                author=info.get('author'),
                duration=info.get('length'),
                isSeekable=info.get('isSeekable'),
                isStream=info.get('isStream'),
                uri=info.get('uri'),
                artworkUrl=cls._artworkUrl(info),
                pluginInfo=data.get('pluginInfo') or {},
                requester=requester if requester is not None else {},
            )

            dropped = ()
            if cls.trackPartial:
                dropped = frozenset(k for k in fields if k not in cls.trackPartial)
                for key in dropped:
                    del fields[key]

            track = ResolvedTrack(**fields)
            track._dropped = dropped
            return track
        except Exception as e:
            raise BuildError(f'Argument "data" is not a valid track: {e}') from e

    @staticmethod
    def buildUnresolved(query: Union[str, Mapping[str, Any], None], requester: Any = None) -> UnresolvedTrack:
        """Build a placeholder from a title or a partial descriptor."""
        if query is None:
            raise PreconditionError('Argument "query" must be present.')

        if isinstance(query, str):
            return UnresolvedTrack(requester=requester, title=query)

        if isinstance(query, Mapping):
            fields = {'requester': requester, **query}
            fields.pop('resolve', None)
            return UnresolvedTrack(**fields)

        raise PreconditionError('Argument "query" must be a string or a mapping.')

    @staticmethod
    def pluginClaimsPattern(plugin: Any, pattern: str) -> bool:
        """Whether an installed plugin provides the source ``pattern`` points at."""
        name = type(plugin).__name__.lower()
        return bool(name) and name in pattern.lower()

    @classmethod
    def validUnresolvedUris(cls) -> List[str]:
        options = cls.manager.options
        valids = list(DEFAULT_VALID_URIS)
        valids.extend(options.get('validUnresolvedUris') or [])

        plugins = options.get('plugins') or []
        return [
            valid for valid in valids
            if not any(cls.pluginClaimsPattern(p, valid) for p in plugins if p is not None)
        ]

    @classmethod
    def isValidUnresolvedUri(cls, uri: Optional[str]) -> bool:
        """Whether ``uri`` can be loaded directly instead of searched for."""
        if not uri:
            return False
        lowered = uri.lower()
        return any(valid.lower() in lowered for valid in cls.validUnresolvedUris())

    @classmethod
    def _merge(cls, candidate: ResolvedTrack, unresolved: UnresolvedTrack) -> ResolvedTrack:
        """
        Lay the unresolved track's data over ``candidate``.

        Without ``useUnresolvedData`` the node's title is only replaced when
        it is a placeholder, author and artwork when the unresolved value
        differs. An unresolved value that is ``None`` never erases what the
        node reported, even though it differs.
        """
        if unresolved.uri:
            candidate.uri = unresolved.uri

        if cls.manager.options.get('useUnresolvedData'):
            for key in ('artworkUrl', 'title', 'author'):
                value = getattr(unresolved, key, None)
                if value:
                    setattr(candidate, key, value)
        else:
            # Keep the node's data unless it is a placeholder
            if (unresolved.title is not None and candidate.title in PLACEHOLDER_TITLES
                    and candidate.title != unresolved.title):
                candidate.title = unresolved.title
            for key in ('author', 'artworkUrl'):
                value = getattr(unresolved, key, None)
                if value is not None and value != getattr(candidate, key):
                    setattr(candidate, key, value)

        for key, value in unresolved.toDict().items():
            if key == 'resolve' or not value:
                continue
            if getattr(candidate, key, None) is None:
                setattr(candidate, key, value)

        return candidate

    @staticmethod
    def _pick(tracks: List[ResolvedTrack], unresolved: UnresolvedTrack) -> ResolvedTrack:
        if unresolved.author:
            channelNames = (unresolved.author, f"{unresolved.author} - Topic")
            for track in tracks:
                if any(_sameText(name, track.author) for name in channelNames) or \
                        _sameText(unresolved.title, track.title):
                    logger.debug(f"Matched '{unresolved}' by author/title: {track!r}")
                    return track

        if unresolved.duration:
            for track in tracks:
                if track.duration is None:
                    continue
                if abs(track.duration - unresolved.duration) <= DURATION_TOLERANCE:
                    logger.debug(f"Matched '{unresolved}' by duration: {track!r}")
                    return track

        return tracks[0]

    @classmethod
    async def getClosestTrack(cls, unresolvedTrack: UnresolvedTrack, node=None) -> Optional[ResolvedTrack]:
        """
        Search for ``unresolvedTrack`` and return the best matching track.

        Local tracks are looked up with ``searchLocal`` and a miss returns
        ``None``. Anything else is searched remotely and a miss raises
        ``ResolutionError``.
        """
        if cls.manager is None:
            raise PreconditionError('Manager has not been initiated.')
        if unresolvedTrack is None or not cls.isUnresolvedTrack(unresolvedTrack):
            raise PreconditionError('Provided track is not an UnresolvedTrack.')

        manager = cls.manager

        if unresolvedTrack.local:
            res = await manager.searchLocal(unresolvedTrack.uri, unresolvedTrack.requester, node)
            tracks = (res or {}).get('tracks') or []
            if not tracks:
                logger.debug(f"No local track for {unresolvedTrack.uri!r}")
                return None
            return cls._merge(tracks[0], unresolvedTrack)

        query = ' by '.join(s for s in (unresolvedTrack.title, unresolvedTrack.author) if s)
        if cls.isValidUnresolvedUri(unresolvedTrack.uri):
            logger.debug(f"Resolving {unresolvedTrack!r} by uri {unresolvedTrack.uri!r}")
            res = await manager.search(unresolvedTrack.uri, unresolvedTrack.requester, node)
        else:
            logger.debug(f"Resolving {unresolvedTrack!r} by query {query!r}")
            res = await manager.search(query, unresolvedTrack.requester, node)

        res = res or {}
        if res.get('loadType') not in SEARCH_LOAD_TYPES:
            raise ResolutionError(res.get('exception'))

        tracks = res.get('tracks') or []
        if not tracks:
            raise ResolutionError(res.get('exception'))

        return cls._merge(cls._pick(tracks, unresolvedTrack), unresolvedTrack)
