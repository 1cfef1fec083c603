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
__all__ = ('LoadTypes', 'v4LoadTypes', 'SEARCH_LOAD_TYPES', 'EMPTY_LOAD_TYPES',
           'ERROR_LOAD_TYPES')


class LoadTypes:
    """Load types reported by Lavalink v3 nodes."""
    TRACK_LOADED = 'TRACK_LOADED'
    PLAYLIST_LOADED = 'PLAYLIST_LOADED'
    SEARCH_RESULT = 'SEARCH_RESULT'
    NO_MATCHES = 'NO_MATCHES'
    LOAD_FAILED = 'LOAD_FAILED'


class v4LoadTypes:
    """Load types reported by Lavalink v4 nodes."""
    TRACK = 'track'
    PLAYLIST = 'playlist'
    SEARCH = 'search'
    EMPTY = 'empty'
    ERROR = 'error'


SEARCH_LOAD_TYPES = (LoadTypes.SEARCH_RESULT, v4LoadTypes.SEARCH)
EMPTY_LOAD_TYPES = (LoadTypes.NO_MATCHES, v4LoadTypes.EMPTY)
ERROR_LOAD_TYPES = (LoadTypes.LOAD_FAILED, v4LoadTypes.ERROR)
