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

__all__ = ('GarnishError', 'PreconditionError', 'BuildError',
           'StructureError', 'ResolutionError', 'NO_TRACKS_MESSAGE',
           'COMMON_SEVERITY')

NO_TRACKS_MESSAGE = 'No tracks found.'
COMMON_SEVERITY = 'COMMON'


class GarnishError(Exception):
    """Base class for every error raised by Garnish."""


class PreconditionError(GarnishError, ValueError):
    """A required argument is missing or the library is not set up yet."""


class BuildError(GarnishError, ValueError):
    """Raw node data could not be turned into a track."""


class StructureError(GarnishError, TypeError):
    """Unknown or unset structure name."""


class ResolutionError(GarnishError):
    """
    An unresolved track could not be matched.

    ``exception`` holds the node's own exception payload when the node
    reported one (``{'message': ..., 'severity': ..., 'cause': ...}``).
    """

    def __init__(self, exception: Optional[Dict[str, Any]] = None):
        self.exception = exception
        payload = exception or {}
        self.message: str = payload.get('message') or NO_TRACKS_MESSAGE
        self.severity: str = payload.get('severity') or COMMON_SEVERITY
        self.cause: Optional[str] = payload.get('cause')
        super().__init__(self.message)

    def __repr__(self):
        return f"ResolutionError(message='{self.message}', severity='{self.severity}')"
