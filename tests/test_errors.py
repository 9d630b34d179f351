"""Tests for error formatting utilities."""

import subprocess
from pathlib import Path

import pytest
from pydantic import ValidationError

from thynkai import exit_codes
from thynkai.errors import format_validation_errors, handle_cli_error
from thynkai.fs import InvalidJsonError
from thynkai.schema import ModelEntry, VersionEntry
from thynkai.validate import RegistryValidationError


class TestFormatValidationErrors:
    """Tests for format_validation_errors function."""

    def test_single_missing_field(self) -> None:
        """Verify single missing field produces clean message."""
        # Given - create a validation error by validating incomplete data
        try:
            VersionEntry.model_validate({
                "version": "1.0.0",
                "releasedAt": "2024-05-01",
                # modelId is missing
            })
            pytest.fail("Expected ValidationError")
        except ValidationError as e:
            # When
            result = format_validation_errors(e)

        # Then - clean message without Pydantic URL
        assert result == "'modelId': field is required"
        assert "pydantic.dev" not in result

    def test_multiple_errors_joined(self) -> None:
        """Verify multiple errors are listed in field order."""
        # Given
        try:
            ModelEntry.model_validate({
                "id": "org/foo",
                "name": "Foo",
                "modality": "audio",
                "owner": [],
                "createdAt": "2024-05-01",
                "version": "1.0",
            })
            pytest.fail("Expected ValidationError")
        except ValidationError as e:
            # When
            result = format_validation_errors(e)

        # Then
        parts = result.split("; ")
        assert parts[0].startswith("'modality':")
        assert parts[1] == "'owner': expected object"
        assert parts[2] == "'version': must be SemVer (MAJOR.MINOR.PATCH)"
        assert "For further information" not in result

    def test_custom_validator_message_is_clean(self) -> None:
        """Verify the 'Value error,' prefix is dropped."""
        try:
            VersionEntry.model_validate({
                "modelId": "org/foo",
                "version": "1.0.0",
                "releasedAt": "2024-05-01",
                "artifact": {"digest": "sha256:abc"},
            })
            pytest.fail("Expected ValidationError")
        except ValidationError as e:
            result = format_validation_errors(e)

        assert result == "'artifact.digest': must be sha256: followed by 64 hex characters"


class TestHandleCliError:
    """Tests for handle_cli_error function."""

    def test_registry_error(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Invariant violations print their message to stderr."""
        code = handle_cli_error(RegistryValidationError("model.id required: x/model.json"))

        assert code == exit_codes.GENERAL_ERROR
        assert "model.id required: x/model.json" in capsys.readouterr().err

    def test_invalid_json(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Invalid JSON errors name the file."""
        code = handle_cli_error(InvalidJsonError(Path("models/text/foo/model.json")))

        assert code == exit_codes.GENERAL_ERROR
        assert "invalid_json: models/text/foo/model.json" in capsys.readouterr().err

    def test_os_error_with_filename(self, capsys: pytest.CaptureFixture[str]) -> None:
        """OS errors show strerror and the path."""
        error = FileNotFoundError(2, "No such file or directory", "models")

        code = handle_cli_error(error)

        assert code == exit_codes.GENERAL_ERROR
        assert "No such file or directory: models" in capsys.readouterr().err

    def test_called_process_error(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Subprocess failures show the command and exit code."""
        error = subprocess.CalledProcessError(128, ["git", "status"])

        code = handle_cli_error(error)

        assert code == exit_codes.GENERAL_ERROR
        assert "Command failed (exit code 128): git status" in capsys.readouterr().err

    def test_pydantic_error(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Schema errors are formatted without Pydantic URLs."""
        try:
            VersionEntry.model_validate({})
            pytest.fail("Expected ValidationError")
        except ValidationError as e:
            code = handle_cli_error(e)

        err = capsys.readouterr().err
        assert code == exit_codes.GENERAL_ERROR
        assert "Invalid document" in err
        assert "pydantic.dev" not in err

    def test_unexpected_error(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Anything else is reported as unexpected."""
        code = handle_cli_error(RuntimeError("boom"))

        assert code == exit_codes.GENERAL_ERROR
        assert "Unexpected error: boom" in capsys.readouterr().err
