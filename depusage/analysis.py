"""Project dependency analysis result: the used/undeclared/unused partition."""

from __future__ import annotations

from collections.abc import Hashable, Iterable, Iterator, Mapping, Set
from types import MappingProxyType
from typing import Union

import structlog

from depusage.exceptions import ForceUsageError
from depusage.models import DependencyCoordinate, UsageEvidence

log = structlog.get_logger("depusage.analysis")


class FrozenOrderedSet(Set, Hashable):
    """Immutable set that iterates in insertion order.

    Equality and hashing follow ``frozenset`` semantics, so order never
    affects comparisons.
    """

    __slots__ = ("_items",)

    def __init__(self, items: Iterable = ()) -> None:
        self._items = dict.fromkeys(items)

    def __contains__(self, item: object) -> bool:
        return item in self._items

    def __iter__(self) -> Iterator:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __hash__(self) -> int:
        return self._hash()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self._items)!r})"


_NO_EVIDENCE: FrozenOrderedSet = FrozenOrderedSet()

UsageInput = Union[
    Mapping[DependencyCoordinate, Union[Iterable[UsageEvidence], None]],
    Iterable[DependencyCoordinate],
    None,
]


def _copy_usages(source: UsageInput) -> Mapping[DependencyCoordinate, FrozenOrderedSet]:
    """Snapshot a coordinate -> evidence mapping (or bare coordinates) into a read-only view."""
    if source is None:
        return MappingProxyType({})
    if isinstance(source, Mapping):
        copy = {
            coord: _NO_EVIDENCE if evidence is None else FrozenOrderedSet(evidence)
            for coord, evidence in source.items()
        }
    else:
        copy = {coord: _NO_EVIDENCE for coord in source}
    return MappingProxyType(copy)


def _render(coords: Iterable[DependencyCoordinate]) -> str:
    return "[" + ", ".join(str(c) for c in coords) + "]"


class AnalysisResult:
    """Result of a project dependency analysis.

    Every dependency lands in exactly one bucket:

    * used-declared: referenced by the compiled output and declared;
    * used-undeclared: referenced but only reachable transitively;
    * unused-declared: declared but never referenced.

    Instances are immutable. The two transformations return new results
    and never touch the receiver, so results can be shared freely.
    """

    __slots__ = (
        "_used_declared",
        "_used_undeclared",
        "_unused_declared",
        "_used_declared_keys",
        "_used_undeclared_keys",
    )

    def __init__(
        self,
        used_declared: UsageInput = None,
        used_undeclared: UsageInput = None,
        unused_declared: Iterable[DependencyCoordinate] | None = None,
    ) -> None:
        self._used_declared = _copy_usages(used_declared)
        self._used_undeclared = _copy_usages(used_undeclared)
        self._unused_declared = FrozenOrderedSet(() if unused_declared is None else unused_declared)
        self._used_declared_keys = FrozenOrderedSet(self._used_declared)
        self._used_undeclared_keys = FrozenOrderedSet(self._used_undeclared)

    # ── accessors ────────────────────────────────────────────────────────

    @property
    def used_declared(self) -> FrozenOrderedSet:
        """Used and declared coordinates."""
        return self._used_declared_keys

    @property
    def used_declared_usages(self) -> Mapping[DependencyCoordinate, FrozenOrderedSet]:
        """Used and declared coordinates mapped to their usage evidence."""
        return self._used_declared

    @property
    def used_undeclared(self) -> FrozenOrderedSet:
        """Used but not declared coordinates."""
        return self._used_undeclared_keys

    @property
    def used_undeclared_usages(self) -> Mapping[DependencyCoordinate, FrozenOrderedSet]:
        """Used but not declared coordinates mapped to their usage evidence."""
        return self._used_undeclared

    @property
    def unused_declared(self) -> FrozenOrderedSet:
        """Declared but unused coordinates."""
        return self._unused_declared

    # ── transformations ──────────────────────────────────────────────────

    def restrict_to_compile_scope(self) -> AnalysisResult:
        """Drop unused-declared coordinates that are not compile scoped."""
        kept = [coord for coord in self._unused_declared if coord.is_compile_scope]
        log.debug(
            "analysis.restrict_to_compile_scope",
            kept=len(kept),
            dropped=len(self._unused_declared) - len(kept),
        )
        return AnalysisResult(self._used_declared, self._used_undeclared, kept)

    def force_usage(self, identifiers: Iterable[str]) -> AnalysisResult:
        """Move declared dependencies from unused-declared to used-declared.

        Fixes what bytecode-level analysis cannot see: inlined constants,
        source-retention annotations, reflection. *identifiers* use the
        ``group:artifact`` form and match every version/classifier of that
        dependency.

        Raises :class:`ForceUsageError` if any identifier is not declared or
        is already detected as used; the receiver is left untouched.
        """
        if isinstance(identifiers, str):
            identifiers = [identifiers]
        requested = list(dict.fromkeys(identifiers))
        wanted = set(requested)

        forced_used: dict[DependencyCoordinate, Iterable[UsageEvidence]] = dict(
            self._used_declared
        )
        still_unused: list[DependencyCoordinate] = []
        consumed: set[str] = set()

        for coord in self._unused_declared:
            key = coord.versionless_id
            if key in wanted:
                consumed.add(key)
                forced_used.setdefault(coord, _NO_EVIDENCE)
            else:
                still_unused.append(coord)

        unmatched = [ident for ident in requested if ident not in consumed]
        if unmatched:
            used_ids = {coord.versionless_id for coord in self._used_declared}
            already_used = [ident for ident in unmatched if ident in used_ids]
            not_declared = [ident for ident in unmatched if ident not in used_ids]
            log.warning(
                "analysis.force_usage_rejected",
                not_declared=not_declared,
                already_used=already_used,
            )
            raise ForceUsageError(not_declared, already_used)

        log.debug(
            "analysis.force_usage",
            requested=len(requested),
            forced=len(self._unused_declared) - len(still_unused),
        )
        return AnalysisResult(forced_used, self._used_undeclared, still_unused)

    # ── object protocol ──────────────────────────────────────────────────

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AnalysisResult):
            return NotImplemented
        return (
            self.used_declared == other.used_declared
            and self.used_undeclared == other.used_undeclared
            and self.unused_declared == other.unused_declared
        )

    def __hash__(self) -> int:
        return hash((self.used_declared, self.used_undeclared, self.unused_declared))

    def __str__(self) -> str:
        buckets = [
            ("usedDeclaredArtifacts", self.used_declared),
            ("usedUndeclaredArtifacts", self.used_undeclared),
            ("unusedDeclaredArtifacts", self.unused_declared),
        ]
        body = ",".join(f"{name}={_render(coords)}" for name, coords in buckets if coords)
        return f"{type(self).__name__}[{body}]"

    __repr__ = __str__
