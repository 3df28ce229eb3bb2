"""Custom exceptions for depusage."""

from __future__ import annotations


class DependencyAnalysisError(Exception):
    """Base exception for all dependency analysis errors."""


class ForceUsageError(DependencyAnalysisError):
    """Raised when dependencies cannot be forced from unused-declared to used-declared.

    ``not_declared`` lists identifiers matching no declared dependency,
    ``already_used`` lists identifiers already detected as used-declared.
    """

    def __init__(self, not_declared: list[str], already_used: list[str]):
        self.not_declared = tuple(not_declared)
        self.already_used = tuple(already_used)
        parts: list[str] = []
        if self.not_declared:
            parts.append(f"not declared: [{', '.join(self.not_declared)}]")
        if self.already_used:
            parts.append(
                f"declared but already detected as used: [{', '.join(self.already_used)}]"
            )
        super().__init__(
            "Trying to force use of dependencies which are " + " and ".join(parts)
        )
