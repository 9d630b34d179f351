"""Model entry scaffolding.

Creates a new models/<modality>/<slug>/ entry with a model.json, a first
versions/<version>.json and a PERFORMANCE.md template. Placeholder values
are left as TODO for the contributor to fill in.
"""

from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path

from thynkai.config import DEFAULT_OWNER, DEFAULT_OWNER_NAME
from thynkai.formats import MODALITIES, is_semver
from thynkai.fs import write_json
from thynkai.schema import ModelEntry, Owner, VersionEntry
from thynkai.validate import MODEL_FILENAME, MODELS_DIR, PERFORMANCE_FILENAME, VERSIONS_DIR

DEFAULT_VERSION = "0.1.0"

PERFORMANCE_TEMPLATE = """\
# Performance notes - {model_id}

- Benchmark: TODO
- Date: {date}
- Environment: TODO
- Report: TODO

Notes:
- Keep it factual and reproducible.
"""


@dataclass
class ScaffoldResult:
    """Paths written by scaffold_model."""

    base_dir: Path
    model_file: Path
    version_file: Path
    performance_file: Path


def _format_timestamp(moment: datetime) -> str:
    """Format as UTC ISO 8601 with milliseconds and a Z suffix."""
    return moment.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _validate_slug(slug: str) -> None:
    if not slug or slug in (".", "..") or Path(slug).name != slug or "\\" in slug:
        msg = f"slug must be a single directory name, got '{slug}'"
        raise ValueError(msg)


def scaffold_model(
    root: Path,
    modality: str,
    slug: str,
    model_id: str,
    name: str | None = None,
    owner: str = DEFAULT_OWNER,
    owner_name: str = DEFAULT_OWNER_NAME,
    version: str = DEFAULT_VERSION,
    now: datetime | None = None,
) -> ScaffoldResult:
    """Scaffold a model entry under root/models/<modality>/<slug>/.

    Existing files are overwritten without warning.

    Args:
        root: Registry root directory.
        modality: One of text, vision, multimodal.
        slug: Directory name for the model.
        model_id: Canonical model id (recommended org/name).
        name: Display name. Defaults to the slug.
        owner: Owner contributor id.
        owner_name: Owner display name.
        version: First version, must be SemVer.
        now: Timestamp for createdAt/releasedAt. Defaults to the current time.

    Returns:
        ScaffoldResult with the directory and files written.

    Raises:
        ValueError: If modality, slug, id or version is invalid.
        ValidationError: If the built documents fail their schema, e.g. a blank name.
    """
    if modality not in MODALITIES:
        msg = f"modality must be one of {'|'.join(MODALITIES)}, got '{modality}'"
        raise ValueError(msg)
    _validate_slug(slug)
    if not model_id.strip():
        msg = "id must not be blank"
        raise ValueError(msg)
    if not is_semver(version):
        msg = f"version must be SemVer, got '{version}'"
        raise ValueError(msg)

    timestamp = _format_timestamp(now or datetime.now(UTC))

    owner_entry = Owner.model_validate({"contributorId": owner, "displayName": owner_name})
    # Key order as in existing registry entries: description follows modality
    model_doc = {
        "id": model_id,
        "name": name or slug,
        "modality": modality,
        "description": "TODO: add description",
        "owner": owner_entry.model_dump(by_alias=True),
        "createdAt": timestamp,
        "version": version,
        "tags": ["todo"],
        "links": {"repo": "TODO"},
    }
    ModelEntry.model_validate(model_doc)
    release = VersionEntry.model_validate({
        "modelId": model_id,
        "version": version,
        "releasedAt": timestamp,
    })

    base_dir = root / MODELS_DIR / modality / slug
    model_file = base_dir / MODEL_FILENAME
    version_file = base_dir / VERSIONS_DIR / f"{version}.json"
    performance_file = base_dir / PERFORMANCE_FILENAME

    write_json(model_file, model_doc)
    write_json(version_file, release.model_dump(mode="json", by_alias=True))
    performance_file.write_text(
        PERFORMANCE_TEMPLATE.format(model_id=model_id, date=timestamp[:10]),
        encoding="utf-8",
    )

    return ScaffoldResult(
        base_dir=base_dir,
        model_file=model_file,
        version_file=version_file,
        performance_file=performance_file,
    )
