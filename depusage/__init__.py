"""depusage: immutable model of a project dependency-usage analysis."""

__version__ = "0.1.0"

from depusage.analysis import AnalysisResult, FrozenOrderedSet
from depusage.exceptions import DependencyAnalysisError, ForceUsageError
from depusage.models import (
    SCOPE_COMPILE,
    SCOPE_IMPORT,
    SCOPE_PROVIDED,
    SCOPE_RUNTIME,
    SCOPE_SYSTEM,
    SCOPE_TEST,
    DependencyCoordinate,
    UsageEvidence,
)
from depusage.options import AnalysisOptions

__all__ = [
    "SCOPE_COMPILE",
    "SCOPE_IMPORT",
    "SCOPE_PROVIDED",
    "SCOPE_RUNTIME",
    "SCOPE_SYSTEM",
    "SCOPE_TEST",
    "AnalysisOptions",
    "AnalysisResult",
    "DependencyAnalysisError",
    "DependencyCoordinate",
    "ForceUsageError",
    "FrozenOrderedSet",
    "UsageEvidence",
]
