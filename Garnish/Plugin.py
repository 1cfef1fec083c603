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
__all__ = ('Plugin',)


class Plugin:
  """
  Base class for manager plugins.

  A plugin's class name matters: unresolved tracks whose uri points at a
  source named like an installed plugin are searched by text instead of
  being loaded by uri.
  """

  def load(self, manager) -> None:
    pass

  def unload(self, manager) -> None:
    pass

  def __repr__(self):
    return f"{type(self).__name__}()"
