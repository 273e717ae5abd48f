# src/lined/core/__init__.py
"""Public facade for lined.core: re-export main classes from CamelCase modules.

Keeps the CamelCase file names (RowStore.py, EditEngine.py, ...),
but provides flat imports for convenience and stability.
"""

# Re-export classes/symbols from CamelCase modules
from .EditEngine import Cursor, EditEngine  # noqa: F401
from .EditorSession import EditorSession  # noqa: F401
from .FileStore import FileStore, FileStoreError  # noqa: F401
from .Navigator import Navigator  # noqa: F401
from .RowStore import Row, RowStore  # noqa: F401
from .Viewport import Viewport  # noqa: F401


__all__ = [
    "Cursor",
    "EditEngine",
    "EditorSession",
    "FileStore",
    "FileStoreError",
    "Navigator",
    "Row",
    "RowStore",
    "Viewport",
]
