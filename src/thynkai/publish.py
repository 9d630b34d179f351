"""Dry-run publish summary.

Lists the files a pull request would touch. Publishing itself happens by
opening a PR; this module never writes, stages or pushes anything.
"""

import os
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from thynkai.fs import walk_files
from thynkai.git import git_diff_names, git_status_paths

DRY_RUN_NOTE = "publish is dry-run only. Open a PR to submit changes."


@dataclass
class PublishSummary:
    """Files that would be part of a publish."""

    root: Path
    since: str | None
    changed_files: list[str] = field(default_factory=list)
    from_git: bool = True

    @property
    def count(self) -> int:
        """Number of changed files."""
        return len(self.changed_files)

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready representation."""
        return {
            "root": str(self.root),
            "since": self.since,
            "changedFiles": self.changed_files,
            "count": self.count,
        }


def list_changed_files(root: Path, since: str | None = None) -> list[str]:
    """Ask git which files under root changed.

    Raises:
        FileNotFoundError: If git is not installed.
        subprocess.CalledProcessError: If git fails (bad ref, not a repo).
    """
    if since:
        return git_diff_names(since, root)
    return git_status_paths(root)


def summarize_changes(root: Path, since: str | None = None) -> PublishSummary:
    """Build the dry-run publish summary for root.

    Uses git diff against since (or git status when since is not given).
    If git is unavailable or fails for any reason, falls back to listing
    every file under root relative to the current directory.

    Args:
        root: Directory to summarize.
        since: Optional git ref to diff against.

    Returns:
        PublishSummary with the sorted list of changed files.

    Raises:
        OSError: If git failed and root cannot be walked either.
    """
    try:
        changed = list_changed_files(root, since)
        from_git = True
    except (OSError, subprocess.CalledProcessError):
        changed = [os.path.relpath(p) for p in walk_files(root)]
        from_git = False

    return PublishSummary(
        root=root,
        since=since,
        changed_files=sorted(changed),
        from_git=from_git,
    )
