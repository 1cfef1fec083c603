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

__all__ = ('ResolvedTrack', 'UnresolvedTrack')


class ResolvedTrack:
  """
  A playable track. Fields are plain attributes; a track field the node
  never reported, or one dropped by the track partial, reads as ``None``.
  Any other missing attribute raises ``AttributeError``.
  """

  FIELDS = frozenset((
    'encodedTrack', 'title', 'identifier', 'author', 'duration', 'isSeekable',
    'isStream', 'uri', 'artworkUrl', 'requester', 'pluginInfo', 'sourceName',
    'position', 'isrc', 'length', 'local',
  ))

  def __init__(self, **fields):
    self.__dict__.update(fields)

  def __getattr__(self, name):
    if name in ResolvedTrack.FIELDS or name in self.__dict__.get('_dropped', ()):
      return None
    raise AttributeError(f"'{type(self).__name__}' object has no attribute '{name}'")

  def toDict(self) -> Dict[str, Any]:
    return {k: v for k, v in self.__dict__.items() if not k.startswith('_')}

  def __eq__(self, other):
    if not isinstance(other, ResolvedTrack):
      return NotImplemented
    return self.encodedTrack == other.encodedTrack and self.uri == other.uri

  __hash__ = object.__hash__

  def __str__(self):
    return f"{self.title} by {self.author}"

  def __repr__(self):
    return f"ResolvedTrack(title='{self.title}', author='{self.author}', duration={self.duration})"


class UnresolvedTrack:
  """
  Placeholder built from user input, played only after ``resolve``.

  ``resolve`` swaps this very object into a ``ResolvedTrack`` so queues and
  anything else holding a reference see the resolved data. Only one
  resolution may run per instance.
  """

  def __init__(self, requester: Any = None, **fields):
    self.title: Optional[str] = None
    self.author: Optional[str] = None
    self.duration: Optional[int] = None
    self.uri: Optional[str] = None
    self.artworkUrl: Optional[str] = None
    self.local: bool = False
    self.requester = requester
    self.__dict__.update(fields)

  async def resolve(self, node=None) -> Optional[ResolvedTrack]:
    from .TrackUtils import TrackUtils

    resolved = await TrackUtils.getClosestTrack(self, node)
    if resolved is None:
      return None

    fields = dict(resolved.__dict__)
    self.__dict__.clear()
    self.__class__ = type(resolved)
    self.__dict__.update(fields)
    return self

  def toDict(self) -> Dict[str, Any]:
    return {k: v for k, v in self.__dict__.items() if not k.startswith('_')}

  def __str__(self):
    if self.author:
      return f"{self.title} by {self.author}"
    return f"{self.title}"

  def __repr__(self):
    return f"UnresolvedTrack(title='{self.title}', author='{self.author}', duration={self.duration})"
