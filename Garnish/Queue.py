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
import random

from .Errors import PreconditionError
from .TrackUtils import TrackUtils

__all__ = ('Queue',)


class Queue:
  """
  Upcoming tracks of a player. Entries may be resolved or unresolved;
  unresolved ones are resolved by the player right before they play.
  """

  def __init__(self, player, maxPrevious: int = 10):
    self.player = player
    self._q = []
    self.loop = None  # None, 'track' or 'queue'
    self.previous = []
    self._maxPrevious = maxPrevious

  def add(self, track, offset=None):
    """Add a track or a list of tracks, at the end or at ``offset``."""
    if not TrackUtils.validate(track):
      raise PreconditionError('Track must be a ResolvedTrack or UnresolvedTrack (or a list of them).')

    tracks = list(track) if isinstance(track, (list, tuple)) else [track]
    if offset is None:
      self._q.extend(tracks)
    else:
      if not isinstance(offset, int) or offset < 0 or offset > len(self._q):
        raise PreconditionError(f'Offset must be between 0 and {len(self._q)}.')
      self._q[offset:offset] = tracks

  def remove(self, index):
    if 0 <= index < len(self._q):
      return self._q.pop(index)
    return None

  def clear(self):
    self._q.clear()
    self.previous.clear()

  def shuffle(self):
    random.shuffle(self._q)

  def getNext(self):
    """Track to play next, left in the queue until it finishes."""
    if self.loop == 'track' and self.player.current:
      return self.player.current

    if not self._q and self.loop == 'queue' and self.previous:
      self._q = self.previous.copy()
      self.previous.clear()

    return self._q[0] if self._q else None

  def consumeNext(self):
    """Drop the head after it finished and remember it."""
    if not self._q:
      return None

    consumed = self._q.pop(0)
    self.previous.append(consumed)
    if len(self.previous) > self._maxPrevious:
      self.previous.pop(0)
    return consumed

  def peek(self, index=0):
    if 0 <= index < len(self._q):
      return self._q[index]
    return None

  @property
  def size(self):
    return len(self._q)

  @property
  def duration(self):
    """Sum of known durations in ms."""
    return sum(t.duration or 0 for t in self._q)

  def __iter__(self):
    return iter(self._q.copy())

  def __len__(self):
    return len(self._q)

  def __bool__(self):
    return len(self._q) > 0

  def __repr__(self):
    return f"Queue(length={len(self._q)}, loop={self.loop})"
