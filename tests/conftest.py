"""Shared fixtures for check-ai tests."""

import logging
import shutil
import subprocess
from pathlib import Path
from typing import Dict, List, Optional

import pytest


def write_tree(root: Path, files: Dict[str, Optional[str]]) -> Path:
    """Create files and directories below root.

    Keys ending in "/" (or mapped to None) become directories, everything
    else a file with the given text.
    """
    for rel, content in files.items():
        target = root / rel
        if rel.endswith("/") or content is None:
            target.mkdir(parents=True, exist_ok=True)
        else:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")
    return root


requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git not installed")


def init_git_repo(root: Path, messages: List[str]) -> Path:
    """Create a git repository at root with one empty commit per message."""
    root.mkdir(parents=True, exist_ok=True)
    git = ["git", "-c", "user.name=Test", "-c", "user.email=test@example.com",
           "-c", "commit.gpgsign=false"]
    subprocess.run(git + ["init", "-q", str(root)], check=True)
    for message in messages:
        subprocess.run(git + ["commit", "-q", "--allow-empty", "-m", message], cwd=str(root), check=True)
    return root


@pytest.fixture
def make_repo(tmp_path):
    """Factory building a repository tree under a fresh temp directory."""
    def _make(files: Optional[Dict[str, Optional[str]]] = None) -> Path:
        root = tmp_path / "repo"
        root.mkdir(exist_ok=True)
        return write_tree(root, files or {})
    return _make


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers the CLI installs so later tests log normally."""
    yield
    package_logger = logging.getLogger("check_ai")
    package_logger.handlers.clear()
    package_logger.setLevel(logging.NOTSET)
