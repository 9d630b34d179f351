"""Models registry validation.

Checks every models/<modality>/<slug>/model.json entry and its versions/
directory against the registry layout rules. Validation is fail-fast: the
first violated rule raises and nothing after it is checked.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from thynkai.formats import is_semver, is_sha256_digest
from thynkai.fs import load_json, walk_files
from thynkai.schema import ModelEntry

MODELS_DIR = "models"
MODEL_FILENAME = "model.json"
PERFORMANCE_FILENAME = "PERFORMANCE.md"
VERSIONS_DIR = "versions"

# Messages per model.json field, in the order fields are checked
_MODEL_FIELD_ERRORS = {
    "id": "model.id required",
    "name": "model.name required",
    "modality": "model.modality invalid",
    "owner": "model.owner required",
    "createdAt": "model.createdAt must be an ISO 8601 date",
    "version": "model.version must be SemVer",
}


class RegistryValidationError(Exception):
    """Raised when a registry document violates a layout or content rule."""


@dataclass
class RegistryReport:
    """Summary of a successful validation run."""

    models: int
    versions: int


def validate_models(root: Path) -> RegistryReport:
    """Validate the models registry under root.

    Walks root/models, then for each model.json (in walk order) checks the
    document fields, the modality folder, the PERFORMANCE.md companion and
    every version file in the sibling versions/ directory.

    Args:
        root: Registry root containing the models/ directory.

    Returns:
        RegistryReport with the number of models and version files checked.

    Raises:
        RegistryValidationError: On the first violated rule.
        InvalidJsonError: If a model or version document is not valid JSON.
        OSError: If models/ is missing or a file cannot be read.
    """
    models_dir = root / MODELS_DIR
    files = walk_files(models_dir)

    model_files = [p for p in files if p.name == MODEL_FILENAME]
    version_files = [p for p in files if _is_version_file(p, models_dir)]

    _require(model_files, f"no {MODEL_FILENAME} entries found under {MODELS_DIR}/")

    versions_checked = 0
    for model_file in model_files:
        model = _validate_model_document(model_file)
        _check_modality_folder(model_file, models_dir, model)
        _check_performance_notes(model_file)
        versions_checked += _check_versions(model_file, model, version_files)

    return RegistryReport(models=len(model_files), versions=versions_checked)


def _require(condition: Any, message: str) -> None:
    if not condition:
        raise RegistryValidationError(message)


def _is_version_file(path: Path, models_dir: Path) -> bool:
    """A *.json file with a versions/ directory somewhere below models/."""
    if path.suffix != ".json":
        return False
    return VERSIONS_DIR in path.relative_to(models_dir).parts[:-1]


def _validate_model_document(model_file: Path) -> ModelEntry:
    """Parse model.json and report the first invalid field."""
    data = load_json(model_file)
    _require(isinstance(data, dict), f"model document must be a JSON object: {model_file}")

    try:
        return ModelEntry.model_validate(data)
    except ValidationError as e:
        first = e.errors()[0]
        field = str(first["loc"][0]) if first["loc"] else ""
        message = _MODEL_FIELD_ERRORS.get(field, f"model.{field} invalid")
        raise RegistryValidationError(f"{message}: {model_file}") from e


def _check_modality_folder(model_file: Path, models_dir: Path, model: ModelEntry) -> None:
    # models/<modality>/<slug>/model.json
    folder_modality = model_file.relative_to(models_dir).parts[0]
    _require(
        folder_modality == model.modality.value,
        f"modality folder mismatch for {model.id}: "
        f"folder '{folder_modality}' but modality '{model.modality.value}'",
    )


def _check_performance_notes(model_file: Path) -> None:
    perf_path = model_file.with_name(PERFORMANCE_FILENAME)
    try:
        is_file = perf_path.is_file()
    except OSError as e:
        raise RegistryValidationError(f"{PERFORMANCE_FILENAME} missing: {perf_path}") from e
    _require(is_file, f"{PERFORMANCE_FILENAME} missing: {perf_path}")


def _check_versions(model_file: Path, model: ModelEntry, version_files: list[Path]) -> int:
    """Check every version file belonging to the model and return how many there were."""
    versions_dir = model_file.with_name(VERSIONS_DIR)
    expected_file = versions_dir / f"{model.version}.json"
    matching = [vf for vf in version_files if versions_dir in vf.parents]

    _require(matching, f"no versions found for model {model.id}")
    _require(
        expected_file in matching,
        f"missing {VERSIONS_DIR}/{model.version}.json for model {model.id}",
    )

    for version_file in matching:
        _check_version_document(version_file, model)

    return len(matching)


def _check_version_document(version_file: Path, model: ModelEntry) -> None:
    data = load_json(version_file)
    _require(isinstance(data, dict), f"version document must be a JSON object: {version_file}")

    _require(data.get("modelId") == model.id, f"version.modelId mismatch: {version_file}")

    version = data.get("version")
    _require(is_semver(version), f"version.version invalid: {version_file}")
    _require(version_file.stem == version, f"version filename mismatch: {version_file}")

    artifact = data.get("artifact")
    if isinstance(artifact, dict) and "digest" in artifact:
        _require(
            is_sha256_digest(artifact["digest"]),
            f"artifact.digest invalid: {version_file}",
        )
