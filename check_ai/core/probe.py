"""File Probe Module - Filesystem helpers that never raise.

Every helper maps a failure (missing path, permission denied, undecodable
content, broken symlink) to an "absent" answer: ``False``, ``None``, ``""``,
``[]`` or ``0``. Audit analyzers receive a :class:`FileProbe` instead of
touching the filesystem directly.
"""

import os
from pathlib import Path
from typing import List, Optional, Union

PathLike = Union[str, Path]


class FileProbe:
    """Read-only, exception-free view of the filesystem."""

    def __init__(self, encoding: str = "utf-8"):
        """Initialize the probe.

        Args:
            encoding: Text encoding used by read helpers
        """
        self.encoding = encoding

    def exists(self, path: PathLike) -> bool:
        """Check whether a path exists (file, directory or anything else)."""
        return self.stat(path) is not None

    def stat(self, path: PathLike) -> Optional[os.stat_result]:
        """Stat a path, following symlinks.

        Returns:
            The stat result, or None if the path cannot be stat'ed
        """
        try:
            return os.stat(path)
        except (OSError, ValueError):
            return None

    def read_text(self, path: PathLike) -> str:
        """Read a text file, returning an empty string on any error."""
        try:
            return Path(path).read_text(encoding=self.encoding)
        except (OSError, UnicodeDecodeError, ValueError):
            return ""

    def list_dir(self, path: PathLike) -> List[str]:
        """List entry names of a directory, sorted, or [] on error."""
        try:
            return sorted(os.listdir(path))
        except (OSError, ValueError):
            return []

    def line_count(self, path: PathLike) -> int:
        """Count non-blank lines of a text file."""
        content = self.read_text(path)
        return len([line for line in content.split("\n") if line.strip()])

    def item_count(self, path: PathLike) -> int:
        """Count non-hidden entries of a directory."""
        return len([name for name in self.list_dir(path) if not name.startswith(".")])
