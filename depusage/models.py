"""Data models for dependency coordinates and usage evidence."""

from __future__ import annotations

import functools
from dataclasses import dataclass

SCOPE_COMPILE = "compile"
SCOPE_PROVIDED = "provided"
SCOPE_RUNTIME = "runtime"
SCOPE_TEST = "test"
SCOPE_SYSTEM = "system"
SCOPE_IMPORT = "import"

DEFAULT_TYPE = "jar"


@functools.total_ordering
@dataclass(frozen=True)
class DependencyCoordinate:
    """Identity of a declared or referenced dependency.

    Supplied by the upstream resolver; every field takes part in equality,
    scope included.
    """

    group_id: str
    artifact_id: str
    version: str
    type: str = DEFAULT_TYPE
    classifier: str | None = None
    scope: str | None = SCOPE_COMPILE  # "compile" | "provided" | "runtime" | "test" | "system"

    @property
    def versionless_id(self) -> str:
        """``group:artifact`` key used when forcing usage."""
        return f"{self.group_id}:{self.artifact_id}"

    @property
    def is_compile_scope(self) -> bool:
        return self.scope == SCOPE_COMPILE

    def _sort_key(self) -> tuple[str, ...]:
        return (
            self.group_id,
            self.artifact_id,
            self.version,
            self.type,
            self.classifier or "",
            self.scope or "",
        )

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, DependencyCoordinate):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def __str__(self) -> str:
        parts = [self.group_id, self.artifact_id, self.type]
        if self.classifier:
            parts.append(self.classifier)
        parts.append(self.version)
        parts.append(self.scope or "")
        return ":".join(parts)

    @classmethod
    def parse(cls, text: str) -> DependencyCoordinate:
        """Parse a coordinate from its colon-separated form.

        Accepted forms::

            group:artifact:version
            group:artifact:type:version
            group:artifact:type:version:scope
            group:artifact:type:classifier:version:scope

        An empty trailing scope (``g:a:jar:1.0:``) means no scope, which is
        how :meth:`__str__` renders a scopeless coordinate.
        """
        parts = [p.strip() for p in text.strip().split(":")]
        required = parts[:-1] if len(parts) in (5, 6) else parts
        if any(not p for p in required):
            raise ValueError(f"empty segment in dependency coordinate {text!r}")

        if len(parts) == 3:
            group_id, artifact_id, version = parts
            return cls(group_id, artifact_id, version)
        if len(parts) == 4:
            group_id, artifact_id, type_, version = parts
            return cls(group_id, artifact_id, version, type=type_)
        if len(parts) == 5:
            group_id, artifact_id, type_, version, scope = parts
            return cls(group_id, artifact_id, version, type=type_, scope=scope or None)
        if len(parts) == 6:
            group_id, artifact_id, type_, classifier, version, scope = parts
            return cls(
                group_id,
                artifact_id,
                version,
                type=type_,
                classifier=classifier,
                scope=scope or None,
            )
        raise ValueError(
            f"cannot parse dependency coordinate {text!r}: expected 3 to 6 colon-separated parts"
        )


@dataclass(frozen=True)
class UsageEvidence:
    """A single fact showing why a dependency was judged used."""

    dependency_class: str  # referenced class or symbol inside the dependency
    used_by: str | None = None  # referencing class in the analysed project

    def __str__(self) -> str:
        if self.used_by:
            return f"{self.used_by} -> {self.dependency_class}"
        return self.dependency_class
