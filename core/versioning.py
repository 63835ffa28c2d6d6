# ============================================================================
# CLAUDE CONTEXT - VERSION COMPARATOR
# ============================================================================
# STATUS: Core - Version parsing and minimum-version policy
# PURPOSE: Parse free-form version strings and compare against a minimum
# EXPORTS: VersionTriple, parse_version, is_compatible, check_minimum_version
# ============================================================================
"""
Version Comparator

Parsing policy:
  - An optional leading non-numeric tag is skipped ("v1.9.3", "stable-2.4.1").
  - The first three dot-separated numeric components are the triple.
  - Anything after the third component is discarded ("-gke.2", "+k3s1", ".4").
  - Fewer than three numeric components is a parse error.

Comparison is lexicographic on (major, minor, patch).
"""

import re
from typing import NamedTuple

from core.errors import VersionIncompatibleError, VersionParseError

_VERSION_PATTERN = re.compile(r"^[^\d]*(\d+)\.(\d+)\.(\d+)")


class VersionTriple(NamedTuple):
    """Parsed (major, minor, patch). Tuple ordering is version ordering."""
    major: int
    minor: int
    patch: int

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"

    @classmethod
    def from_string(cls, raw: str) -> "VersionTriple":
        """Parse a configuration value such as "1.8.0"."""
        return parse_version(raw)


def parse_version(raw: str) -> VersionTriple:
    """
    Parse a version string into a VersionTriple.

    Raises:
        VersionParseError: If no numeric major.minor.patch prefix is found.
    """
    if raw is None:
        raise VersionParseError(str(raw))

    match = _VERSION_PATTERN.match(raw.strip())
    if match is None:
        raise VersionParseError(raw)

    major, minor, patch = (int(part) for part in match.groups())
    return VersionTriple(major, minor, patch)


def is_compatible(actual: VersionTriple, required: VersionTriple) -> bool:
    """True iff actual >= required."""
    if actual.major != required.major:
        return actual.major > required.major
    if actual.minor != required.minor:
        return actual.minor > required.minor
    return actual.patch >= required.patch


def check_minimum_version(
    raw: str,
    required: VersionTriple,
    subject: str = "Kubernetes",
) -> VersionTriple:
    """
    Parse ``raw`` and verify it satisfies ``required``.

    Returns:
        The parsed version.

    Raises:
        VersionParseError: Malformed input.
        VersionIncompatibleError: Parsable but older than ``required``.
    """
    actual = parse_version(raw)
    if not is_compatible(actual, required):
        raise VersionIncompatibleError(actual, required, subject=subject)
    return actual


__all__ = [
    "VersionTriple",
    "parse_version",
    "is_compatible",
    "check_minimum_version",
]
