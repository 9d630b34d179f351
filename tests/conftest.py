"""Shared test fixtures for thynkai tests."""

import json
import os
import subprocess
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
from typer.testing import CliRunner

GIT_ENV = {
    **os.environ,
    "GIT_AUTHOR_NAME": "Test",
    "GIT_AUTHOR_EMAIL": "test@test.com",
    "GIT_COMMITTER_NAME": "Test",
    "GIT_COMMITTER_EMAIL": "test@test.com",
}

VALID_DIGEST = "sha256:" + "ab" * 32


def git_commit_all(work_dir: Path, message: str) -> str:
    """Stage all changes, commit, and return the new commit hash.

    Uses GIT_ENV for deterministic author/committer identity.
    """
    subprocess.run(["git", "add", "-A"], cwd=work_dir, check=True, capture_output=True)
    subprocess.run(
        ["git", "commit", "-m", message],
        cwd=work_dir, check=True, capture_output=True, env=GIT_ENV,
    )
    return subprocess.run(
        ["git", "rev-parse", "HEAD"],
        cwd=work_dir, check=True, capture_output=True, text=True,
    ).stdout.strip()


def write_json_file(path: Path, data: Any) -> None:
    """Write data as JSON, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2) + "\n")


def model_document(
    model_id: str = "org/foo",
    modality: str = "text",
    version: str = "1.0.0",
    **overrides: Any,
) -> dict[str, Any]:
    """Build a valid model.json document, with optional field overrides."""
    doc: dict[str, Any] = {
        "id": model_id,
        "name": "Foo",
        "modality": modality,
        "description": "A test model",
        "owner": {"contributorId": "contrib:test", "displayName": "Test"},
        "createdAt": "2024-05-01T10:00:00.000Z",
        "version": version,
        "tags": ["test"],
        "links": {"repo": "https://example.com/foo"},
    }
    doc.update(overrides)
    return doc


def version_document(
    model_id: str = "org/foo",
    version: str = "1.0.0",
    **overrides: Any,
) -> dict[str, Any]:
    """Build a valid versions/<version>.json document, with optional overrides."""
    doc: dict[str, Any] = {
        "modelId": model_id,
        "version": version,
        "releasedAt": "2024-05-01T10:00:00.000Z",
        "artifact": {
            "uri": "https://example.com/foo.bin",
            "digest": VALID_DIGEST,
            "builtWith": {"framework": "torch", "runtime": "cuda", "notes": ""},
        },
        "benchmarks": [],
    }
    doc.update(overrides)
    return doc


# Type alias for the model entry factory function
ModelFactory = Callable[..., Path]


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Typer CLI test runner."""
    return CliRunner()


@pytest.fixture
def registry_root(tmp_path: Path) -> Path:
    """Empty registry root with a models/ directory."""
    root = tmp_path / "registry"
    (root / "models").mkdir(parents=True)
    return root


@pytest.fixture
def create_model(registry_root: Path) -> ModelFactory:
    """Factory fixture that writes a complete, valid model entry.

    Usage:
        model_dir = create_model()  # models/text/foo with version 1.0.0
        model_dir = create_model(modality="vision", slug="bar", model_id="org/bar")
        model_dir = create_model(versions=["1.0.0", "1.1.0"], version="1.1.0")

    Returns the model directory (models/<modality>/<slug>).
    """

    def _create(
        modality: str = "text",
        slug: str = "foo",
        model_id: str = "org/foo",
        version: str = "1.0.0",
        versions: list[str] | None = None,
        folder: str | None = None,
        performance: bool = True,
        **model_overrides: Any,
    ) -> Path:
        model_dir = registry_root / "models" / (folder or modality) / slug
        write_json_file(
            model_dir / "model.json",
            model_document(model_id=model_id, modality=modality, version=version, **model_overrides),
        )
        for v in versions if versions is not None else [version]:
            write_json_file(
                model_dir / "versions" / f"{v}.json",
                version_document(model_id=model_id, version=v),
            )
        if performance:
            (model_dir / "PERFORMANCE.md").write_text("# Performance notes\n")
        return model_dir

    return _create
