"""Deep Tree Walker Module - Resolves every deep-scan pattern in one traversal."""

import logging
import os
import stat
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, FrozenSet, Iterable, List, Optional, Tuple

logger = logging.getLogger(__name__)

# Build, dependency and VCS output directories never worth descending into
DEFAULT_SKIP_DIRS: FrozenSet[str] = frozenset({
    "node_modules",
    "vendor",
    "dist",
    "build",
    ".git",
    "__pycache__",
    ".next",
    ".nuxt",
    ".output",
    "coverage",
    ".turbo",
    ".vercel",
    ".netlify",
    ".cache",
    ".parcel-cache",
    "target",
    "out",
    "bin",
    "obj",
})

# Hidden directories that hold AI tool assets and must still be inspected
DEFAULT_ALLOWED_HIDDEN_DIRS: FrozenSet[str] = frozenset({
    ".claude",
    ".agents",
    ".windsurf",
    ".cursor",
    ".github",
})

DEFAULT_MAX_DEPTH = 6


@dataclass
class WalkResult:
    """Result of a deep tree walk."""
    root_path: Path
    matches: Dict[str, List[str]] = field(default_factory=dict)
    files_scanned: int = 0
    dirs_scanned: int = 0

    def get_matches(self, pattern: str) -> List[str]:
        """Get relative paths matching a pattern (empty if none)."""
        return self.matches.get(pattern, [])


class DeepTreeWalker:
    """Walks a directory tree once and matches files against many patterns.

    A file matches pattern ``p`` when its basename equals ``p`` or ends with
    ``p``, which allows suffix patterns such as ``.prompt.yml``. Matches at
    the root level are left out: root files are the concern of ordinary
    file checks.
    """

    def __init__(
        self,
        max_depth: int = DEFAULT_MAX_DEPTH,
        skip_dirs: Optional[Iterable[str]] = None,
        allowed_hidden_dirs: Optional[Iterable[str]] = None,
    ):
        """Initialize the walker.

        Args:
            max_depth: Deepest directory level entered (root is 0)
            skip_dirs: Directory basenames never entered
            allowed_hidden_dirs: Dot-directories entered despite being hidden
        """
        self.max_depth = max_depth
        self.skip_dirs: FrozenSet[str] = (
            frozenset(skip_dirs) if skip_dirs is not None else DEFAULT_SKIP_DIRS
        )
        self.allowed_hidden_dirs: FrozenSet[str] = (
            frozenset(allowed_hidden_dirs)
            if allowed_hidden_dirs is not None
            else DEFAULT_ALLOWED_HIDDEN_DIRS
        )

    def walk(self, root_path: str | Path, patterns: Iterable[str]) -> WalkResult:
        """Collect every file below the root that matches any pattern.

        Args:
            root_path: Root directory to walk
            patterns: Filenames or filename suffixes to look for

        Returns:
            WalkResult with one (possibly empty) match list per pattern
        """
        root_path = Path(root_path).resolve()
        unique_patterns = list(dict.fromkeys(patterns))
        result = WalkResult(
            root_path=root_path,
            matches={p: [] for p in unique_patterns},
        )

        for dirpath, depth, filenames in self._walk_directory(root_path):
            result.dirs_scanned += 1
            for filename in filenames:
                result.files_scanned += 1
                if depth == 0:
                    continue
                for pattern in unique_patterns:
                    if filename == pattern or filename.endswith(pattern):
                        rel = os.path.relpath(os.path.join(dirpath, filename), root_path)
                        result.matches[pattern].append(rel.replace(os.sep, "/"))

        logger.debug(
            "Walked %s: %d file(s) in %d dir(s) for %d pattern(s)",
            root_path, result.files_scanned, result.dirs_scanned, len(unique_patterns),
        )
        return result

    def should_enter(self, dirname: str) -> bool:
        """Decide whether a directory basename is walked into."""
        if dirname in self.skip_dirs:
            return False
        if dirname.startswith(".") and dirname not in self.allowed_hidden_dirs:
            return False
        return True

    def _walk_directory(self, root_path: Path):
        """Walk through the directory tree with a depth bound.

        Args:
            root_path: Root directory to walk

        Yields:
            Tuples of (directory path, depth, sorted regular file names);
            symlinks, FIFOs and sockets are left out
        """
        root_str = str(root_path)
        # os.walk swallows listing errors, so unreadable directories look empty
        for dirpath, dirnames, filenames in os.walk(root_str):
            depth = self._depth_of(root_str, dirpath)

            if depth >= self.max_depth:
                dirnames[:] = []
            else:
                dirnames[:] = sorted(d for d in dirnames if self.should_enter(d))

            files = [f for f in filenames if _is_regular_file(os.path.join(dirpath, f))]
            yield dirpath, depth, sorted(files)

    @staticmethod
    def _depth_of(root: str, dirpath: str) -> int:
        rel = os.path.relpath(dirpath, root)
        if rel == os.curdir:
            return 0
        return len(rel.split(os.sep))


def _is_regular_file(path: str) -> bool:
    try:
        return stat.S_ISREG(os.lstat(path).st_mode)
    except OSError:
        return False


def collect_patterns(patterns: Iterable[Optional[str]]) -> Tuple[str, ...]:
    """Deduplicate deep-scan patterns while keeping first-seen order."""
    return tuple(dict.fromkeys(p for p in patterns if p))
