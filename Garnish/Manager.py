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
from typing import Any, Dict, List, Optional
import asyncio
import logging

from .Errors import BuildError, PreconditionError
from .EventEmitter import EventEmitter
from .LoadTypes import EMPTY_LOAD_TYPES, ERROR_LOAD_TYPES, LoadTypes, v4LoadTypes
from .Structure import Structure, StructureRegistry
from .TrackUtils import TrackUtils

__all__ = ('Manager', 'DEFAULT_OPTIONS', 'EMPTY_SEARCH_RESULT', 'SEARCH_PREFIXES')

logger = logging.getLogger(__name__)

DEFAULT_OPTIONS = {
    'useUnresolvedData': False,
    'validUnresolvedUris': [],
    'plugins': [],
    'trackPartial': None,
    'defaultSearchPlatform': 'ytsearch',
    'clientName': 'Garnish/1.0.0',
}

EMPTY_SEARCH_RESULT = {
    'loadType': v4LoadTypes.EMPTY,
    'exception': None,
    'playlistInfo': None,
    'pluginInfo': {},
    'tracks': []
}

# source prefixes the node understands, query is passed through untouched
SEARCH_PREFIXES = ('ytsearch', 'ytmsearch', 'scsearch', 'spsearch', 'amsearch',
                   'dzsearch', 'dzisrc', 'sprec', 'ymsearch')


def _isDirectIdentifier(query: str) -> bool:
    if query.lower().startswith(('http://', 'https://')):
        return True
    prefix, sep, _ = query.partition(':')
    return bool(sep) and prefix.lower() in SEARCH_PREFIXES


class Manager(EventEmitter):
    """
    Entry point of the library: owns the nodes and players and performs the
    searches unresolved tracks are resolved with.

    Creating a manager binds it process-wide for ``TrackUtils``.
    """

    __slots__ = ('options', 'structures', 'nodeOptions', 'nodes', 'players',
                 'clientId', 'started')

    def __init__(self, nodes: List[Dict], opts: Optional[Dict] = None,
                 structures: Optional[StructureRegistry] = None):
        super().__init__(maxListeners=1000)

        opts = opts or {}
        self.options: Dict[str, Any] = {**DEFAULT_OPTIONS, **opts}
        self.options['validUnresolvedUris'] = list(self.options['validUnresolvedUris'] or [])
        self.options['plugins'] = list(self.options['plugins'] or [])

        self.structures = structures or Structure
        self.nodeOptions: List[Dict] = list(nodes or [])
        self.nodes: List[Any] = []
        self.players: Dict[int, Any] = {}
        self.clientId: Optional[str] = None
        self.started = False

        TrackUtils.setTrackPartial(self.options['trackPartial'])

        for plugin in self.options['plugins']:
            plugin.load(self)

        TrackUtils.init(self)

    async def start(self, userId) -> 'Manager':
        """Create and connect every configured node."""
        if self.started:
            return self

        self.clientId = str(userId)
        NodeClass = self.structures.get('Node')
        self.nodes = [NodeClass(self, nc) for nc in self.nodeOptions]
        for node in self.nodes:
            node.updateClientId(self.clientId)

        await asyncio.gather(*(n.connect() for n in self.nodes))

        if any(n.connected for n in self.nodes):
            self.started = True
            self.emit('ready', self)
        else:
            logger.error('No node could be connected')
        return self

    def leastUsedNode(self):
        connected = [n for n in self.nodes if n.connected]
        if not connected:
            return None
        return min(connected, key=lambda n: len(n.players))

    def createPlayer(self, opts: Dict):
        gid = opts.get('guildId')
        if not gid:
            raise PreconditionError('Argument "guildId" must be present.')

        existing = self.players.get(gid)
        if existing and not existing.destroyed:
            return existing

        node = opts.get('node') or self.leastUsedNode()
        if node is None:
            raise PreconditionError('No nodes available.')

        player = self.structures.get('Player')(self, node, opts)
        self.players[gid] = player
        node.players[gid] = player
        self.emit('playerCreate', player)
        return player

    def getPlayer(self, guildId: int):
        player = self.players.get(guildId)
        if player and not player.destroyed:
            return player
        return None

    def destroyPlayer(self, guildId: int) -> None:
        self.players.pop(guildId, None)

    async def stop(self) -> None:
        for player in list(self.players.values()):
            await player.destroy()

        for plugin in self.options['plugins']:
            plugin.unload(self)

        for node in self.nodes:
            await node.close()

        self.players.clear()
        self.started = False
        self.emit('shutdown', self)

    def _requestNode(self, node=None):
        node = node or self.leastUsedNode()
        if node is None:
            raise PreconditionError('No nodes available.')
        return node

    async def search(self, query: str, requester: Any = None, node=None) -> Dict:
        """
        Search with the default platform, or load ``query`` directly when it
        is a url or already carries a search prefix.
        """
        if not query:
            raise PreconditionError('Argument "query" must be present.')

        node = self._requestNode(node)
        if _isDirectIdentifier(query):
            identifier = query
        else:
            identifier = f"{self.options['defaultSearchPlatform']}:{query}"

        resp = await node.loadTracks(identifier)
        return self._constructResp(resp, requester)

    async def searchLocal(self, uri: str, requester: Any = None, node=None) -> Dict:
        """Load a file path or local reference known to the node."""
        if not uri:
            raise PreconditionError('Argument "uri" must be present.')

        node = self._requestNode(node)
        resp = await node.loadTracks(uri)
        return self._constructResp(resp, requester)

    @staticmethod
    def _buildTracks(items, requester) -> List:
        tracks = []
        for item in items or []:
            try:
                tracks.append(TrackUtils.build(item, requester))
            except BuildError as e:
                logger.debug(f"Skipping track from node: {e}")
        return tracks

    def _constructResp(self, resp: Optional[Dict], requester: Any) -> Dict:
        """Normalise a v3 or v4 loadtracks response, building every track."""
        if not isinstance(resp, dict) or resp.get('loadType') in EMPTY_LOAD_TYPES:
            return {**EMPTY_SEARCH_RESULT, 'tracks': []}

        loadType = resp['loadType']
        data = resp.get('data')
        base = {
            'loadType': loadType,
            'exception': None,
            'playlistInfo': None,
            'pluginInfo': resp.get('pluginInfo') or {},
            'tracks': []
        }

        if loadType in ERROR_LOAD_TYPES:
            base['exception'] = data or resp.get('exception')

        elif loadType == v4LoadTypes.TRACK and data:
            base['tracks'] = self._buildTracks([data], requester)

        elif loadType == v4LoadTypes.PLAYLIST and data:
            base['playlistInfo'] = data.get('info')
            base['pluginInfo'] = data.get('pluginInfo') or base['pluginInfo']
            base['tracks'] = self._buildTracks(data.get('tracks'), requester)

        elif loadType == v4LoadTypes.SEARCH and isinstance(data, list):
            base['tracks'] = self._buildTracks(data, requester)

        elif loadType in (LoadTypes.TRACK_LOADED, LoadTypes.PLAYLIST_LOADED, LoadTypes.SEARCH_RESULT):
            base['playlistInfo'] = resp.get('playlistInfo')
            base['tracks'] = self._buildTracks(resp.get('tracks'), requester)

        return base

    def __repr__(self):
        return f"Manager(nodes={len(self.nodes)}, players={len(self.players)}, started={self.started})"
