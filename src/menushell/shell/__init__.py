"""Menu Shell - Textual front end for a menu Application.

Quick Start
-----------
```python
from menushell import Application, MenuTree
from menushell.shell import MenuShell

app = Application(tree, state)
MenuShell(app).run()
```

Core Components
---------------
- **MenuShell**: App with sidebar menu, output view and command input
- **DetailView**: Status line + output area widget
- **DiagnosticsManager**: Troubleshooting snapshots (F12)
"""

from .app import MenuShell, ShellRenderer
from .detail_view import DetailView
from .diagnostics import DiagnosticsManager, gather_version_info

__all__ = [
    "MenuShell",
    "ShellRenderer",
    "DetailView",
    "DiagnosticsManager",
    "gather_version_info",
]
