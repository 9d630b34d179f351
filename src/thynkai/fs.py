"""Filesystem helpers: recursive file listing and JSON document loading."""

import json
from pathlib import Path
from typing import Any


class InvalidJsonError(Exception):
    """Raised when a registry document cannot be parsed as JSON."""

    def __init__(self, path: Path) -> None:
        """Initialize with the path of the offending document."""
        self.path = path
        super().__init__(f"invalid_json: {path}")


def walk_files(root: Path) -> list[Path]:
    """List every regular file below root, recursing into subdirectories.

    Files are returned in directory listing order; callers that need a stable
    order must sort the result themselves. Directories are never included.

    Args:
        root: Directory to walk.

    Returns:
        Flat list of file paths, each prefixed by root.

    Raises:
        FileNotFoundError: If root does not exist.
        NotADirectoryError: If root is a file.
        PermissionError: If a directory cannot be listed.
    """
    files: list[Path] = []
    for entry in root.iterdir():
        if entry.is_dir():
            files.extend(walk_files(entry))
        else:
            files.append(entry)
    return files


def load_json(path: Path) -> Any:
    """Read a file and parse it as JSON.

    Args:
        path: Path to the JSON document.

    Returns:
        The parsed JSON value.

    Raises:
        OSError: If the file cannot be read.
        InvalidJsonError: If the content is not valid UTF-8 JSON.
    """
    raw = path.read_bytes()
    try:
        return json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise InvalidJsonError(path) from e


def write_json(path: Path, data: Any) -> None:
    """Write data as 2-space indented JSON with a trailing newline.

    Parent directories are created as needed; existing files are overwritten.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
