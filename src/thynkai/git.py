"""Git operations for thynkai.

Read-only helpers used by the publish summary. Nothing here stages,
commits or pushes.
"""

import subprocess
from pathlib import Path


def is_git_available() -> bool:
    """Check if git command is available on the system.

    Returns:
        True if git is available, False otherwise.
    """
    try:
        subprocess.run(
            ["git", "--version"],
            capture_output=True,
            check=True,
        )
        return True
    except (FileNotFoundError, subprocess.CalledProcessError):
        return False


def git_diff_names(since: str, path: Path, cwd: Path | None = None) -> list[str]:
    """List files changed since a ref.

    Args:
        since: Git ref to diff against (e.g., "HEAD~1", "origin/main").
        path: Pathspec limiting the diff.
        cwd: Directory to run git in. Defaults to the current directory.

    Returns:
        Changed file paths as reported by git (relative to the repo root).

    Raises:
        FileNotFoundError: If git is not installed.
        subprocess.CalledProcessError: If git diff fails (bad ref, not a repo).
    """
    result = subprocess.run(
        ["git", "diff", "--name-only", since, "--", str(path)],
        cwd=cwd,
        check=True,
        capture_output=True,
        text=True,
    )
    return [line.strip() for line in result.stdout.splitlines() if line.strip()]


def git_status_paths(path: Path, cwd: Path | None = None) -> list[str]:
    """List modified, staged and untracked files from git status.

    Porcelain lines look like "XY path" or "XY old -> new" for renames;
    the status columns are dropped and renames report the new path.

    Args:
        path: Pathspec limiting the status.
        cwd: Directory to run git in. Defaults to the current directory.

    Returns:
        File paths with pending changes.

    Raises:
        FileNotFoundError: If git is not installed.
        subprocess.CalledProcessError: If git status fails (not a repo).
    """
    result = subprocess.run(
        ["git", "status", "--porcelain", "--untracked-files=all", "--", str(path)],
        cwd=cwd,
        check=True,
        capture_output=True,
        text=True,
    )
    paths: list[str] = []
    for line in result.stdout.splitlines():
        entry = line[3:].strip()
        if " -> " in entry:
            entry = entry.split(" -> ", 1)[1]
        if entry:
            paths.append(entry)
    return paths
