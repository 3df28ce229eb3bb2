"""Post-processing options applied to a raw analysis result."""

from __future__ import annotations

import os
import re
from collections.abc import Iterable

import structlog
from pydantic import BaseModel, ConfigDict, field_validator

from depusage.analysis import AnalysisResult

log = structlog.get_logger("depusage.options")

IGNORE_NON_COMPILE_ENV = "DEPUSAGE_IGNORE_NON_COMPILE"
USED_DEPENDENCIES_ENV = "DEPUSAGE_USED_DEPENDENCIES"

_TRUTHY = {"1", "true", "yes", "on"}
_VERSIONLESS_ID_RE = re.compile(r"^[^:\s]+:[^:\s]+$")


class AnalysisOptions(BaseModel):
    """Caller policy for narrowing and correcting an analysis.

    ``ignore_non_compile`` restricts unused-declared findings to compile
    scope; ``used_dependencies`` lists ``group:artifact`` ids to force as
    used-declared.
    """

    model_config = ConfigDict(frozen=True)

    ignore_non_compile: bool = False
    used_dependencies: tuple[str, ...] = ()

    @field_validator("used_dependencies", mode="before")
    @classmethod
    def _normalize_ids(cls, v: object) -> object:
        if isinstance(v, str):
            v = v.split(",")
        if not isinstance(v, Iterable):
            return v
        ids: list[str] = []
        for raw in v:
            ident = raw.strip() if isinstance(raw, str) else raw
            if ident == "":
                continue
            if not isinstance(ident, str) or not _VERSIONLESS_ID_RE.match(ident):
                raise ValueError(f"expected 'groupId:artifactId', got {raw!r}")
            ids.append(ident)
        return tuple(ids)

    @classmethod
    def from_env(cls) -> AnalysisOptions:
        """Build options from environment variables.

        DEPUSAGE_IGNORE_NON_COMPILE — 1 | true | yes | on (default: off)
        DEPUSAGE_USED_DEPENDENCIES  — comma separated groupId:artifactId list
        """
        ignore = os.environ.get(IGNORE_NON_COMPILE_ENV, "").strip().lower() in _TRUTHY
        used = os.environ.get(USED_DEPENDENCIES_ENV, "")
        return cls(ignore_non_compile=ignore, used_dependencies=used)

    def apply(self, result: AnalysisResult) -> AnalysisResult:
        """Derive a new result: compile-scope filter first, then forced usage.

        Propagates :class:`~depusage.exceptions.ForceUsageError`.
        """
        if self.ignore_non_compile:
            result = result.restrict_to_compile_scope()
        if self.used_dependencies:
            result = result.force_usage(self.used_dependencies)
        log.debug(
            "options.applied",
            ignore_non_compile=self.ignore_non_compile,
            used_dependencies=len(self.used_dependencies),
        )
        return result
