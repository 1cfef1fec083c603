"""
DO WHAT THE FUCK YOU WANT TO PUBLIC LICENSE
Version 2, December 2004

Copyright (C) 2004 Sam Hocevar <sam@hocevar.net>

Everyone is permitted to copy and distribute verbatim or modified
copies of this license document, and changing it is allowed as long
as the name is changed.

DO WHAT THE FUCK YOU WANT TO PUBLIC LICENSE
TERMS AND CONDITIONS FOR COPYING, DISTRIBUTION AND MODIFICATION

0. You just DO WHAT THE FUCK YOU WANT TO.
"""
import asyncio
import logging

from Garnish import Manager, ResolutionError, Structure, TrackUtils

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def withHistory(Queue):
    """Keep a longer history than the default ten tracks."""
    class HistoryQueue(Queue):
        def __init__(self, player):
            super().__init__(player, maxPrevious=50)
    return HistoryQueue


Structure.extend('Queue', withHistory)

NODES = [{'host': '127.0.0.1', 'port': 2333, 'auth': 'youshallnotpass'}]


async def main():
    manager = Manager(NODES, {'useUnresolvedData': True})
    manager.on('trackError', lambda player, track, err: logger.warning(f"Skipped {track}: {err}"))
    await manager.start(userId=1234)
    if not manager.started:
        return

    # tracks as they come out of a playlist export
    playlist = [
        {'title': 'Never Gonna Give You Up', 'author': 'Rick Astley', 'duration': 213000},
        {'title': 'Bohemian Rhapsody', 'author': 'Queen'},
        'Around the World Daft Punk',
    ]
    tracks = [TrackUtils.buildUnresolved(item, requester='example') for item in playlist]

    try:
        first = await tracks[0].resolve()
        logger.info(f"Resolved {first!r} -> {first.uri}")
    except ResolutionError as e:
        logger.error(f"Could not resolve {tracks[0]}: {e.message} ({e.severity})")

    player = manager.createPlayer({'guildId': 1})
    player.queue.add(tracks[1:])
    logger.info(f"Queued {len(player.queue)} tracks on {player!r}")

    await manager.stop()


if __name__ == '__main__':
    asyncio.run(main())
