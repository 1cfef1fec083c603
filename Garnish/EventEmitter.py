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
from collections import defaultdict
from typing import Any, Callable, Dict, List, Tuple
import asyncio
import inspect
import logging

__all__ = ('EventEmitter',)

logger = logging.getLogger(__name__)


class EventEmitter:
    """
    Event emitter for manager events. Coroutine listeners are scheduled as
    tasks on the running loop, plain callables run inline.
    """

    __slots__ = ('_events', '_maxListeners')

    def __init__(self, maxListeners: int = 100):
        self._events: Dict[str, List[Tuple[Callable, bool]]] = defaultdict(list)
        self._maxListeners = maxListeners

    def _add(self, event: str, listener: Callable, once: bool) -> None:
        if len(self._events[event]) >= self._maxListeners:
            logger.warning(f"Listener limit ({self._maxListeners}) reached for '{event}'")
            return
        self._events[event].append((listener, once))

    def on(self, event: str, listener: Callable) -> Callable:
        self._add(event, listener, False)
        return listener

    def once(self, event: str, listener: Callable) -> Callable:
        self._add(event, listener, True)
        return listener

    def off(self, event: str, listener: Callable = None) -> None:
        if listener is None:
            self._events.pop(event, None)
            return
        self._events[event] = [(l, o) for l, o in self._events[event] if l is not listener]

    def emit(self, event: str, *args: Any) -> bool:
        """Call every listener of ``event``; returns whether there was one."""
        listeners = self._events.get(event)
        if not listeners:
            return False

        self._events[event] = [(l, o) for l, o in listeners if not o]
        for listener, _ in listeners:
            try:
                if inspect.iscoroutinefunction(listener):
                    asyncio.get_running_loop().create_task(listener(*args))
                else:
                    listener(*args)
            except Exception:
                logger.error(f"Error in listener for '{event}'", exc_info=True)
        return True

    def listenerCount(self, event: str) -> int:
        return len(self._events.get(event, ()))
