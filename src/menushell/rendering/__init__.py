"""Renderers for menu snapshots.

- **RichRenderer**: panels and tables built with rich, used by the
  interactive shell and printable to any rich Console
- **PlainRenderer**: linear text suitable for pipes and dumb terminals
"""

from .base import Renderer
from .plain import PlainRenderer
from .rich import RichRenderer

__all__ = ["Renderer", "PlainRenderer", "RichRenderer"]
