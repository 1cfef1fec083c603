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
from typing import Any, Callable, Dict, Optional
import logging

from .Errors import StructureError

__all__ = ('StructureRegistry', 'Structure', 'STRUCTURE_NAMES')

logger = logging.getLogger(__name__)

STRUCTURE_NAMES = ('Player', 'Queue', 'Node')


def _defaultStructures() -> Dict[str, Any]:
  from .Node import Node
  from .Player import Player
  from .Queue import Queue
  return {'Player': Player, 'Queue': Queue, 'Node': Node}


class StructureRegistry:
  """
  Holds the class currently bound to each extendable structure.

  Bindings only ever grow: ``extend`` wraps whatever is bound right now and
  every later ``get`` sees the wrapped class. There is no way to unregister.
  """

  __slots__ = ('_structures',)

  def __init__(self, structures: Optional[Dict[str, Any]] = None):
    self._structures: Optional[Dict[str, Any]] = None
    if structures is not None:
      self._structures = {self._key(n): impl for n, impl in structures.items()}

  @staticmethod
  def _key(name: str) -> str:
    if isinstance(name, str):
      for known in STRUCTURE_NAMES:
        if known.lower() == name.lower():
          return known
    raise StructureError(f'"{name}" is not a valid structure')

  def _bindings(self) -> Dict[str, Any]:
    if self._structures is None:
      self._structures = _defaultStructures()
    return self._structures

  def extend(self, name: str, extender: Callable[[Any], Any]) -> Any:
    """Wrap the class bound to ``name`` and bind the result in its place."""
    key = self._key(name)
    bindings = self._bindings()
    extended = extender(bindings.get(key))
    bindings[key] = extended
    logger.debug(f"Structure {key} extended to {getattr(extended, '__name__', extended)!r}")
    return extended

  def get(self, name: str) -> Any:
    """Return the class currently bound to ``name``."""
    structure = self._bindings().get(self._key(name))
    if structure is None:
      raise StructureError(f'Structure "{name}" is not set')
    return structure

  def __contains__(self, name) -> bool:
    try:
      return self._bindings().get(self._key(name)) is not None
    except StructureError:
      return False

  def __repr__(self):
    names = ', '.join(f"{k}={getattr(v, '__name__', v)}" for k, v in self._bindings().items())
    return f"StructureRegistry({names})"


Structure = StructureRegistry()
