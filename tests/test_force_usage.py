"""Tests for AnalysisResult.force_usage and ForceUsageError."""

from __future__ import annotations

import pytest
from structlog.testing import capture_logs

from depusage.analysis import AnalysisResult
from depusage.exceptions import DependencyAnalysisError, ForceUsageError
from depusage.models import SCOPE_TEST, DependencyCoordinate, UsageEvidence

GA_1 = DependencyCoordinate("G", "A", "1.0")
GA_2 = DependencyCoordinate("G", "A", "2.0", classifier="jdk8")
LOMBOK = DependencyCoordinate("org.projectlombok", "lombok", "1.18.30")
SLF4J = DependencyCoordinate("org.slf4j", "slf4j-api", "2.0.9")
JUNIT = DependencyCoordinate("junit", "junit", "4.13.2", scope=SCOPE_TEST)
GUAVA = DependencyCoordinate("com.google.guava", "guava", "33.0.0-jre")

SLF4J_USAGE = UsageEvidence("org.slf4j.Logger", used_by="app.Main")
GUAVA_USAGE = UsageEvidence("com.google.common.base.Preconditions", used_by="app.Main")


def _result(**overrides) -> AnalysisResult:
    kwargs = {
        "used_declared": {SLF4J: [SLF4J_USAGE]},
        "used_undeclared": {GUAVA: [GUAVA_USAGE]},
        "unused_declared": [GA_1, LOMBOK, JUNIT],
    }
    kwargs.update(overrides)
    return AnalysisResult(**kwargs)


class TestForceUsage:
    def test_empty_request_returns_equal_result(self):
        result = _result()
        forced = result.force_usage([])
        assert forced == result
        assert list(forced.unused_declared) == list(result.unused_declared)

    def test_moves_matching_coordinate(self):
        result = _result()
        forced = result.force_usage(["G:A"])

        assert GA_1 in forced.used_declared
        assert GA_1 not in forced.unused_declared
        assert len(forced.used_declared_usages[GA_1]) == 0
        assert list(forced.used_undeclared_usages[GUAVA]) == [GUAVA_USAGE]
        assert forced.used_undeclared_usages == result.used_undeclared_usages

    def test_keeps_existing_evidence_and_order(self):
        forced = _result().force_usage(["org.projectlombok:lombok", "G:A"])
        assert list(forced.used_declared) == [SLF4J, GA_1, LOMBOK]
        assert list(forced.used_declared_usages[SLF4J]) == [SLF4J_USAGE]
        assert list(forced.unused_declared) == [JUNIT]

    def test_matches_any_scope(self):
        forced = _result().force_usage(["junit:junit"])
        assert JUNIT in forced.used_declared
        assert JUNIT not in forced.unused_declared

    def test_one_identifier_forces_every_version(self):
        result = _result(unused_declared=[GA_1, LOMBOK, GA_2])
        forced = result.force_usage(["G:A"])
        assert GA_1 in forced.used_declared
        assert GA_2 in forced.used_declared
        assert list(forced.unused_declared) == [LOMBOK]

    def test_duplicate_identifiers_are_tolerated(self):
        forced = _result().force_usage(["G:A", "G:A"])
        assert list(forced.used_declared).count(GA_1) == 1

    def test_coordinate_already_used_keeps_its_evidence(self):
        result = AnalysisResult({GA_1: [SLF4J_USAGE]}, None, [GA_1])
        forced = result.force_usage(["G:A"])

        assert list(forced.used_declared) == [GA_1]
        assert list(forced.used_declared_usages[GA_1]) == [SLF4J_USAGE]
        assert GA_1 not in forced.unused_declared

    def test_single_string_identifier(self):
        forced = _result().force_usage("G:A")
        assert GA_1 in forced.used_declared

    def test_receiver_untouched(self):
        result = _result()
        result.force_usage(["G:A"])
        assert list(result.used_declared) == [SLF4J]
        assert list(result.unused_declared) == [GA_1, LOMBOK, JUNIT]

    def test_result_stays_partitioned(self):
        forced = _result().force_usage(["G:A", "junit:junit"])
        used = set(forced.used_declared)
        undeclared = set(forced.used_undeclared)
        unused = set(forced.unused_declared)
        assert not (used & undeclared)
        assert not (used & unused)
        assert not (undeclared & unused)

    def test_logs_forced_count(self):
        with capture_logs() as logs:
            _result().force_usage(["G:A"])
        assert logs == [
            {"event": "analysis.force_usage", "log_level": "debug", "requested": 1, "forced": 1}
        ]


class TestForceUsageRejected:
    def test_not_declared(self):
        result = _result()
        with pytest.raises(ForceUsageError) as exc_info:
            result.force_usage(["org.example:missing"])

        err = exc_info.value
        assert err.not_declared == ("org.example:missing",)
        assert err.already_used == ()
        assert str(err) == (
            "Trying to force use of dependencies which are not declared: [org.example:missing]"
        )
        assert list(result.used_declared) == [SLF4J]
        assert list(result.unused_declared) == [GA_1, LOMBOK, JUNIT]

    def test_undeclared_but_used_counts_as_not_declared(self):
        with pytest.raises(ForceUsageError) as exc_info:
            _result().force_usage(["com.google.guava:guava"])
        assert exc_info.value.not_declared == ("com.google.guava:guava",)

    def test_already_used(self):
        with pytest.raises(ForceUsageError) as exc_info:
            _result().force_usage(["org.slf4j:slf4j-api"])

        err = exc_info.value
        assert err.not_declared == ()
        assert err.already_used == ("org.slf4j:slf4j-api",)
        assert str(err) == (
            "Trying to force use of dependencies which are "
            "declared but already detected as used: [org.slf4j:slf4j-api]"
        )

    def test_reports_both_groups(self):
        with pytest.raises(ForceUsageError) as exc_info:
            _result().force_usage(["x:y", "org.slf4j:slf4j-api", "G:A", "p:q"])

        err = exc_info.value
        assert err.not_declared == ("x:y", "p:q")
        assert err.already_used == ("org.slf4j:slf4j-api",)
        assert str(err) == (
            "Trying to force use of dependencies which are not declared: [x:y, p:q]"
            " and declared but already detected as used: [org.slf4j:slf4j-api]"
        )

    def test_partial_match_is_not_applied(self):
        result = _result()
        with pytest.raises(ForceUsageError):
            result.force_usage(["G:A", "x:y"])
        assert GA_1 in result.unused_declared
        assert GA_1 not in result.used_declared

    def test_full_coordinate_is_not_a_match(self):
        with pytest.raises(ForceUsageError) as exc_info:
            _result().force_usage(["G:A:1.0"])
        assert exc_info.value.not_declared == ("G:A:1.0",)

    def test_is_analysis_error(self):
        with pytest.raises(DependencyAnalysisError):
            _result().force_usage(["x:y"])

    def test_logs_rejection(self):
        with capture_logs() as logs:
            with pytest.raises(ForceUsageError):
                _result().force_usage(["x:y"])
        assert logs == [
            {
                "event": "analysis.force_usage_rejected",
                "log_level": "warning",
                "not_declared": ["x:y"],
                "already_used": [],
            }
        ]
