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
from typing import Any, Dict, Optional
from urllib.parse import quote
import asyncio
import logging

import aiohttp

from .Rest import Rest, _loads

__all__ = ('Node', 'WS_PATH', 'DEFAULT_NODE')

logger = logging.getLogger(__name__)

WS_PATH = 'v4/websocket'

DEFAULT_NODE = {
    'host': '127.0.0.1',
    'port': 2333,
    'auth': 'youshallnotpass',
    'ssl': False,
    'identifier': None,
    'maxReconnectAttempts': 5,
}


class Node:
    """
    A Lavalink node: one websocket for events, REST for everything else.

    Reconnects with capped exponential backoff when the socket drops.
    """

    __slots__ = ('manager', 'host', 'port', 'auth', 'ssl', 'identifier', 'clientName',
                 'wsUrl', 'connected', 'sessionId', 'info', 'stats', 'players', 'ws',
                 'rest', '_listenTask', '_closing', '_reconnectAttempts',
                 '_maxReconnectAttempts')

    def __init__(self, manager, connOpts: Optional[Dict] = None):
        opts = {**DEFAULT_NODE, **(connOpts or {})}
        self.manager = manager
        self.host: str = opts['host']
        self.port: int = opts['port']
        self.auth: str = opts['auth']
        self.ssl: bool = opts['ssl']
        self.identifier: str = opts['identifier'] or f"{self.host}:{self.port}"
        self.clientName: str = manager.options.get('clientName', 'Garnish')
        self.wsUrl = f"ws{'s' if self.ssl else ''}://{self.host}:{self.port}/{WS_PATH}"

        self.connected = False
        self.sessionId: Optional[str] = None
        self.info: Optional[Dict] = None
        self.stats: Optional[Dict] = None
        self.players: Dict[int, Any] = {}
        self.ws: Optional[aiohttp.ClientWebSocketResponse] = None
        self._listenTask: Optional[asyncio.Task] = None
        self._closing = False
        self._reconnectAttempts = 0
        self._maxReconnectAttempts: int = opts['maxReconnectAttempts']

        self.rest = Rest(self)

    def updateClientId(self, userId) -> None:
        self.rest.setUserId(userId)

    async def connect(self) -> bool:
        """Open the websocket and wait briefly for the session id."""
        self._closing = False
        try:
            if not self.rest.session or self.rest.session.closed:
                self.rest.session = aiohttp.ClientSession()
            self.ws = await self.rest.session.ws_connect(
                self.wsUrl, headers=self.rest.headers, autoclose=False, heartbeat=30
            )
        except (aiohttp.ClientError, OSError) as e:
            self.connected = False
            logger.warning(f"Could not connect to {self!r}: {e}")
            self.manager.emit('nodeError', self, e)
            return False

        self.connected = True
        self._reconnectAttempts = 0
        self._listenTask = asyncio.create_task(self._listenWs())

        for _ in range(50):
            if self.sessionId:
                break
            await asyncio.sleep(0.1)

        self.info = await self.rest.makeRequest('GET', 'v4/info')
        self.manager.emit('nodeConnect', self)
        return True

    async def _listenWs(self) -> None:
        try:
            async for msg in self.ws:
                if msg.type == aiohttp.WSMsgType.TEXT:
                    try:
                        data = _loads(msg.data)
                    except ValueError:
                        logger.debug(f"Dropped malformed payload from {self!r}")
                        continue
                    asyncio.create_task(self._handleWsMsg(data))
                elif msg.type in (aiohttp.WSMsgType.ERROR, aiohttp.WSMsgType.CLOSE):
                    break
        finally:
            self.connected = False
            self.sessionId = None
            self.manager.emit('nodeDisconnect', self)
            if not self._closing and self._reconnectAttempts < self._maxReconnectAttempts:
                self._reconnectAttempts += 1
                asyncio.create_task(self._attemptReconnect())

    async def _attemptReconnect(self) -> None:
        delay = min(30, 2 ** self._reconnectAttempts)
        logger.info(f"Reconnecting {self!r} in {delay}s (attempt {self._reconnectAttempts})")
        await asyncio.sleep(delay)
        if not self.connected and not self._closing:
            await self.connect()

    async def _handleWsMsg(self, data: Dict) -> None:
        op = data.get('op')

        if op == 'ready':
            self.sessionId = data.get('sessionId')
            self.manager.emit('nodeReady', self, data)

        elif op == 'stats':
            self.stats = data
            self.manager.emit('nodeStats', self, data)

        elif op == 'playerUpdate':
            player = self._player(data.get('guildId'))
            if player:
                state = data.get('state', {})
                player.position = state.get('position', 0)
                player.timestamp = state.get('time', 0)
                self.manager.emit('playerPositionUpdate', player, state)

        elif op == 'event':
            await self._handleEvent(data)

    def _player(self, gid):
        if isinstance(gid, str):
            try:
                gid = int(gid)
            except ValueError:
                return None
        return self.players.get(gid)

    async def _handleEvent(self, data: Dict) -> None:
        player = self._player(data.get('guildId'))
        if not player:
            return

        evType = data.get('type')
        if evType == 'TrackStartEvent':
            await player.handleTrackStart(data)
        elif evType == 'TrackEndEvent':
            await player.handleTrackEnd(data)
        elif evType in ('TrackStuckEvent', 'TrackExceptionEvent'):
            await player.handleTrackError(data)
        elif evType == 'WebSocketClosedEvent':
            self.manager.emit('playerWebSocketClosed', player, data)

    async def loadTracks(self, identifier: str) -> Optional[Dict]:
        return await self.rest.makeRequest('GET', f"v4/loadtracks?identifier={quote(identifier)}")

    async def updatePlayer(self, guildId: int, data: Dict, replace: bool = False) -> Optional[Dict]:
        if not self.sessionId:
            return None
        noReplace = str(not replace).lower()
        return await self.rest.makeRequest(
            'PATCH', f"v4/sessions/{self.sessionId}/players/{guildId}?noReplace={noReplace}", data
        )

    async def destroyPlayer(self, guildId: int) -> None:
        self.players.pop(guildId, None)
        if self.sessionId:
            await self.rest.makeRequest('DELETE', f"v4/sessions/{self.sessionId}/players/{guildId}")

    async def close(self) -> None:
        self._closing = True
        if self._listenTask and not self._listenTask.done():
            self._listenTask.cancel()
            try:
                await self._listenTask
            except asyncio.CancelledError:
                pass
        if self.ws and not self.ws.closed:
            await self.ws.close()
        await self.rest.close()
        self.connected = False
        self.sessionId = None

    def __repr__(self):
        return f"Node(identifier='{self.identifier}', connected={self.connected})"
