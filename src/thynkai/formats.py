"""Format predicates shared by the scaffolder, validator and digest command.

All checks are pure functions over strings. Non-string inputs are rejected
rather than coerced, since registry documents come straight from JSON.
"""

import re
from datetime import datetime
from typing import Any

MODALITIES = ("text", "vision", "multimodal")

SHA256_PREFIX = "sha256:"
PLACEHOLDER_DIGEST = SHA256_PREFIX + "0" * 64

# MAJOR.MINOR.PATCH[-prerelease][+build]; leading zeros are not rejected
SEMVER_PATTERN = re.compile(
    r"(?P<major>[0-9]+)\.(?P<minor>[0-9]+)\.(?P<patch>[0-9]+)"
    r"(?:-(?P<prerelease>[0-9A-Za-z.-]+))?"
    r"(?:\+(?P<build>[0-9A-Za-z.-]+))?"
)

SHA256_PATTERN = re.compile(r"sha256:[0-9a-fA-F]{64}")


def is_semver(value: Any) -> bool:
    """Check whether value is a SemVer string like 1.2.3-rc.1+build.5."""
    return isinstance(value, str) and SEMVER_PATTERN.fullmatch(value) is not None


def is_sha256_digest(value: Any) -> bool:
    """Check whether value is ``sha256:`` followed by exactly 64 hex characters.

    The hex run is matched case-insensitively; the digest command always
    emits lowercase.
    """
    return isinstance(value, str) and SHA256_PATTERN.fullmatch(value) is not None


def is_iso_date(value: Any) -> bool:
    """Check whether value parses as an ISO 8601 date or timestamp.

    The accepted grammar is exactly what ``datetime.fromisoformat`` accepts
    on Python 3.11+: calendar dates (``2024-05-01``), optional time with
    fractional seconds, ``Z`` or numeric UTC offsets, and the basic
    (``20240501T101500``) forms. Free-form dates such as ``May 1, 2024``
    are rejected.

    Args:
        value: Candidate value, usually taken straight from a JSON document.

    Returns:
        True if value is a string that parses to a datetime.
    """
    if not isinstance(value, str) or not value.strip():
        return False
    try:
        datetime.fromisoformat(value)
    except ValueError:
        return False
    return True
