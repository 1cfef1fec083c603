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
from .Errors import (GarnishError, PreconditionError, BuildError,
                     StructureError, ResolutionError)
from .LoadTypes import LoadTypes, v4LoadTypes
from .Track import ResolvedTrack, UnresolvedTrack
from .TrackUtils import TrackUtils
from .Structure import Structure, StructureRegistry
from .Plugin import Plugin
from .Manager import Manager
from .Node import Node
from .Player import Player
from .Queue import Queue

__version__ = '1.0.0'

__all__ = (
    'GarnishError', 'PreconditionError', 'BuildError', 'StructureError',
    'ResolutionError', 'LoadTypes', 'v4LoadTypes', 'ResolvedTrack',
    'UnresolvedTrack', 'TrackUtils', 'Structure', 'StructureRegistry',
    'Plugin', 'Manager', 'Node', 'Player', 'Queue',
)
