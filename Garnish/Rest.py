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
import logging

import aiohttp

try:
  import orjson
  HAS_ORJSON = True
except ImportError:
  import json
  HAS_ORJSON = False

__all__ = ('Rest',)

logger = logging.getLogger(__name__)


def _dumps(data: Any) -> bytes:
  if HAS_ORJSON:
    return orjson.dumps(data)
  return json.dumps(data).encode()


def _loads(body) -> Any:
  if not body:
    return None
  if HAS_ORJSON:
    return orjson.loads(body)
  return json.loads(body)


class Rest:
  """JSON requests against a node's REST api."""

  def __init__(self, node):
    self.node = node
    self.headers = {
      'Authorization': node.auth,
      'User-Id': '',
      'Client-Name': node.clientName
    }
    self.session: Optional[aiohttp.ClientSession] = None

  @property
  def baseUrl(self) -> str:
    scheme = 'https' if self.node.ssl else 'http'
    return f"{scheme}://{self.node.host}:{self.node.port}"

  def setUserId(self, userId) -> None:
    self.headers['User-Id'] = str(userId)

  async def makeRequest(self, method: str, endpoint: str, data: Optional[Dict] = None) -> Any:
    """
    Send a request and return the decoded body.

    Returns ``None`` for empty bodies, non 2xx statuses and transport errors;
    the latter two are logged. Retrying is left to the caller.
    """
    if not self.session or self.session.closed:
      self.session = aiohttp.ClientSession()

    url = f"{self.baseUrl}/{endpoint.lstrip('/')}"
    headers = dict(self.headers)
    body = None
    if data is not None:
      body = _dumps(data)
      headers['Content-Type'] = 'application/json'

    try:
      async with self.session.request(method, url, data=body, headers=headers) as resp:
        if resp.status == 204:
          return None
        if 200 <= resp.status < 300:
          return _loads(await resp.read())
        logger.warning(f"{method} {endpoint} on {self.node!r} returned {resp.status}")
        return None
    except (aiohttp.ClientError, ValueError) as e:
      logger.warning(f"{method} {endpoint} on {self.node!r} failed: {e}")
      return None

  async def close(self) -> None:
    if self.session and not self.session.closed:
      await self.session.close()
