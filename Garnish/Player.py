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
import asyncio
import logging

from .Errors import GarnishError
from .TrackUtils import TrackUtils

__all__ = ('Player',)

logger = logging.getLogger(__name__)

FINISHED_REASONS = ('finished', 'loadfailed', 'load_failed')


class Player:
    """Plays a guild's queue on one node."""

    __slots__ = (
        'manager', 'node', 'guildId', 'voiceChannel', 'textChannel', 'volume',
        'playing', 'paused', 'connected', 'destroyed', 'current', 'position',
        'timestamp', 'queue', '_voiceState', '_lastVoiceUpdate', '_playLock',
        '__weakref__'
    )

    def __init__(self, manager, node, opts: Optional[Dict] = None):
        opts = opts or {}
        self.manager = manager
        self.node = node
        self.guildId: Optional[int] = opts.get('guildId')
        self.voiceChannel: Optional[str] = opts.get('voiceChannel')
        self.textChannel: Optional[str] = opts.get('textChannel')
        self.volume: int = opts.get('volume', 100)

        self.playing = False
        self.paused = False
        self.connected = False
        self.destroyed = False
        self.current: Optional[Any] = None
        self.position = 0
        self.timestamp = 0

        self._voiceState: Dict = {}
        self._lastVoiceUpdate: Dict = {}
        self._playLock = asyncio.Lock()

        self.queue = manager.structures.get('Queue')(self)

    def isVoiceReady(self) -> bool:
        vs = self._voiceState
        return bool(vs.get('sessionId') and vs.get('token') and vs.get('endpoint'))

    async def handleVoiceStateUpdate(self, data: Dict) -> None:
        if self.destroyed:
            return
        if data.get('session_id'):
            self._voiceState['sessionId'] = data['session_id']
        self.voiceChannel = data.get('channel_id')
        if self.voiceChannel is None:
            self.connected = False
        await self._dispatchVoiceUpdate()

    async def handleVoiceServerUpdate(self, data: Dict) -> None:
        if self.destroyed:
            return
        self._voiceState['token'] = data.get('token')
        self._voiceState['endpoint'] = data.get('endpoint')
        await self._dispatchVoiceUpdate()

    async def _dispatchVoiceUpdate(self) -> None:
        if not self.isVoiceReady() or self._voiceState == self._lastVoiceUpdate:
            return

        await self.node.updatePlayer(self.guildId, {'voice': dict(self._voiceState), 'volume': self.volume})
        self._lastVoiceUpdate = dict(self._voiceState)
        self.connected = True
        self.manager.emit('playerVoiceUpdate', self)

    async def _resolve(self, item) -> bool:
        try:
            resolved = await item.resolve(self.node)
        except GarnishError as e:
            logger.warning(f"Could not resolve {item!r}: {e}")
            self.manager.emit('trackError', self, item, e)
            return False

        if resolved is None:
            logger.warning(f"No local track found for {item!r}")
            self.manager.emit('trackError', self, item, None)
            return False
        return True

    async def play(self) -> None:
        """Play the head of the queue, resolving it first when needed."""
        async with self._playLock:
            if self.destroyed:
                return

            item = self.queue.getNext()
            if item is None:
                self.playing = False
                self.current = None
                self.manager.emit('queueEnd', self)
                return

            if TrackUtils.isUnresolvedTrack(item) and not await self._resolve(item):
                self.queue.consumeNext()
                if self.queue:
                    asyncio.create_task(self.play())
                return

            self.current = item
            await self.node.updatePlayer(self.guildId, {
                'encodedTrack': item.encodedTrack,
                'position': 0,
                'volume': self.volume,
                'paused': False,
            }, replace=True)
            self.position = 0
            self.playing = True
            self.paused = False

    async def handleTrackStart(self, data: Dict) -> None:
        self.playing = True
        self.paused = False
        self.manager.emit('trackStart', self, self.current)

    async def handleTrackEnd(self, data: Dict) -> None:
        reason = str(data.get('reason', 'unknown')).lower()
        ended = self.current

        # a replaced track was already taken off the queue by whoever replaced it
        if reason == 'replaced':
            self.manager.emit('trackEnd', self, ended, reason)
            return

        finished = reason in FINISHED_REASONS
        if not (finished and self.queue.loop == 'track'):
            self.queue.consumeNext()
            self.current = None
        self.manager.emit('trackEnd', self, ended, reason)

        self.playing = False
        self.position = 0
        if not finished:
            return

        if self.queue or self.queue.loop:
            await self.play()
        else:
            self.manager.emit('queueEnd', self)

    async def handleTrackError(self, data: Dict) -> None:
        failed = self.current
        if self.queue.loop != 'track':
            self.queue.consumeNext()
        self.current = None
        self.playing = False
        self.manager.emit('trackError', self, failed, data)

        if self.queue and not self.destroyed:
            await self.play()

    async def skip(self) -> None:
        if self.destroyed:
            return
        skipped = self.current
        self.queue.consumeNext()
        self.current = None
        self.manager.emit('trackSkip', self, skipped)
        await self.play()

    async def stop(self) -> None:
        await self.node.updatePlayer(self.guildId, {'encodedTrack': None}, replace=True)
        self.queue.clear()
        self.current = None
        self.playing = False
        self.paused = False
        self.position = 0
        self.manager.emit('playerStop', self)

    async def pause(self, paused: bool = True) -> None:
        if self.destroyed or self.paused == paused:
            return
        await self.node.updatePlayer(self.guildId, {'paused': paused})
        self.paused = paused
        self.manager.emit('playerPause' if paused else 'playerResume', self)

    async def resume(self) -> None:
        await self.pause(False)

    async def setVolume(self, volume: int) -> None:
        volume = max(0, min(1000, volume))
        await self.node.updatePlayer(self.guildId, {'volume': volume})
        self.volume = volume

    async def seek(self, position: int) -> None:
        if not self.current or not self.current.isSeekable:
            return
        position = max(0, min(position, self.current.duration or position))
        await self.node.updatePlayer(self.guildId, {'position': position})
        self.position = position

    async def destroy(self) -> None:
        if self.destroyed:
            return
        self.destroyed = True
        self.queue.clear()
        self.current = None
        self.playing = False
        self.connected = False
        await self.node.destroyPlayer(self.guildId)
        self.manager.destroyPlayer(self.guildId)
        self.manager.emit('playerDestroy', self)

    def __repr__(self):
        return f"Player(guildId={self.guildId}, playing={self.playing}, queue={len(self.queue)})"
