"""Filesystem abstraction for testability.

This module provides a filesystem abstraction that enables testing
without real I/O operations. The RealFileSystem implementation
wraps standard library operations.
"""

from __future__ import annotations

import os
from pathlib import Path


class RealFileSystem:
    """Production filesystem implementation.

    Wraps standard library Path operations.
    Satisfies the FileSystem protocol structurally.
    """

    def exists(self, path: Path) -> bool:
        """Check if a path exists.

        Unlike ``Path.exists`` this lets ``OSError`` other than
        "not found" propagate, so callers decide how to treat them.
        """
        try:
            os.stat(path)
        except FileNotFoundError:
            return False
        return True

    def read_text(self, path: Path) -> str:
        """Read text content from a file."""
        return path.read_text()

    def write_text(self, path: Path, content: str) -> None:
        """Write text content to a file."""
        path.write_text(content)

    def mkdir(self, path: Path, parents: bool = False, exist_ok: bool = False) -> None:
        """Create a directory."""
        path.mkdir(parents=parents, exist_ok=exist_ok)
