"""Semantic version value type: major.minor.patch with an optional build number."""

from __future__ import annotations

from dataclasses import dataclass
from functools import total_ordering
from typing import Optional

from app_update.domain.errors import ParseError


def _component(value: str) -> int:
    # Legacy and partial version strings degrade to 0 instead of failing.
    if value.isascii() and value.isdigit():
        return int(value)
    return 0


def _build_as_int(build: Optional[str]) -> Optional[int]:
    if build is None:
        return None
    build = build.strip()
    if build.isascii() and build.isdigit():
        return int(build)
    return None


@total_ordering
@dataclass(frozen=True, eq=False)
class SemanticVersion:
    major: int = 0
    minor: int = 0
    patch: int = 0
    build_number: Optional[str] = None

    def __post_init__(self):
        for name in ("major", "minor", "patch"):
            if getattr(self, name) < 0:
                raise ParseError(f"Version component {name} must be non-negative")

    @classmethod
    def parse(cls, version: str) -> "SemanticVersion":
        """Parse ``1.2.3`` or ``1.2.3+456``.

        Missing trailing components default to 0 and non-numeric components
        read as 0. More than three dot-separated components raise ParseError.
        """
        parts = version.strip().split("+")
        numbers = parts[0].split(".")
        if len(numbers) > 3:
            raise ParseError(f"Invalid version format: {version}")

        major = _component(numbers[0])
        minor = _component(numbers[1]) if len(numbers) > 1 else 0
        patch = _component(numbers[2]) if len(numbers) > 2 else 0
        build_number = parts[1] if len(parts) > 1 else None
        return cls(major=major, minor=minor, patch=patch, build_number=build_number)

    @classmethod
    def from_build_code(cls, code: int | str) -> "SemanticVersion":
        """Store version codes only fill the build slot."""
        return cls(build_number=str(code))

    def compare(self, other: "SemanticVersion") -> int:
        """Return -1, 0 or 1."""
        mine = (self.major, self.minor, self.patch)
        theirs = (other.major, other.minor, other.patch)
        if mine != theirs:
            return -1 if mine < theirs else 1

        build_a = _build_as_int(self.build_number)
        build_b = _build_as_int(other.build_number)
        if build_a is not None and build_b is not None and build_a != build_b:
            return -1 if build_a < build_b else 1
        return 0

    def __eq__(self, other):
        if not isinstance(other, SemanticVersion):
            return NotImplemented
        return self.compare(other) == 0

    def __lt__(self, other):
        if not isinstance(other, SemanticVersion):
            return NotImplemented
        return self.compare(other) < 0

    def __hash__(self):
        return hash((self.major, self.minor, self.patch))

    @property
    def short(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"

    def __str__(self) -> str:
        if self.build_number is not None:
            return f"{self.short}+{self.build_number}"
        return self.short
