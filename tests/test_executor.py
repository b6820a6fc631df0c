# ============================================================================
# PROBE EXECUTOR TESTS
# ============================================================================
# STATUS: Tests - Concurrent execution and aggregation
# PURPOSE: Verify deadlines, failure containment and critical gating
# CREATED: 18 OCT 2026
# ============================================================================
"""
Tests for ProbeExecutor and the probe result types.

Run with:
    pytest tests/test_executor.py -v
"""

import asyncio
import functools
import json
import time

import pytest

from health import (
    CallableProbe,
    Criticality,
    HealthStatus,
    ProbeExecutor,
    ProbeOutcome,
    ProbeRegistry,
)


def _executor(*probes, deadline=5.0):
    registry = ProbeRegistry()
    for probe in probes:
        registry.register(probe)
    return ProbeExecutor(registry, default_deadline=deadline)


# ============================================================================
# AGGREGATION
# ============================================================================

class TestAggregation:

    def test_all_healthy(self, make_probe):
        executor = _executor(make_probe("database"), make_probe("redis"))
        report = asyncio.run(executor.run_all())

        assert report.overall_status == HealthStatus.HEALTHY
        assert report.is_healthy
        assert report.failing_probes() == []

    def test_informational_failure_keeps_overall_healthy(self, make_probe):
        executor = _executor(
            make_probe("database"),
            make_probe(
                "cache",
                Criticality.INFORMATIONAL,
                outcome=ProbeOutcome.unhealthy("connection refused"),
            ),
        )
        report = asyncio.run(executor.run_all())

        assert report.overall_status == HealthStatus.HEALTHY
        assert report.per_probe["database"].status == HealthStatus.HEALTHY
        assert report.per_probe["cache"].status == HealthStatus.UNHEALTHY
        assert report.failing_probes() == ["cache"]

    def test_critical_failure_makes_overall_unhealthy(self, make_probe):
        executor = _executor(
            make_probe("database", outcome=ProbeOutcome.unhealthy("down")),
            make_probe("process", Criticality.INFORMATIONAL),
        )
        report = asyncio.run(executor.run_all())
        assert report.overall_status == HealthStatus.UNHEALTHY

    def test_critical_degraded_counts_as_failing(self, make_probe):
        executor = _executor(
            make_probe("database", outcome=ProbeOutcome.degraded("slow")),
        )
        report = asyncio.run(executor.run_all())
        assert report.overall_status == HealthStatus.UNHEALTHY

    def test_mixed_critical_failures_report_unhealthy(self, make_probe):
        executor = _executor(
            make_probe("database", outcome=ProbeOutcome.unhealthy("down")),
            make_probe("redis", outcome=ProbeOutcome.degraded("slow")),
            make_probe("ethereum"),
        )
        report = asyncio.run(executor.run_all())

        assert report.overall_status == HealthStatus.UNHEALTHY
        assert report.failing_probes() == ["database", "redis"]

    @pytest.mark.parametrize("critical_status,info_status,expected", [
        (HealthStatus.HEALTHY, HealthStatus.HEALTHY, HealthStatus.HEALTHY),
        (HealthStatus.HEALTHY, HealthStatus.UNHEALTHY, HealthStatus.HEALTHY),
        (HealthStatus.HEALTHY, HealthStatus.DEGRADED, HealthStatus.HEALTHY),
        (HealthStatus.DEGRADED, HealthStatus.HEALTHY, HealthStatus.UNHEALTHY),
        (HealthStatus.UNHEALTHY, HealthStatus.HEALTHY, HealthStatus.UNHEALTHY),
    ])
    def test_overall_follows_critical_probes_only(
        self, make_probe, critical_status, info_status, expected
    ):
        executor = _executor(
            make_probe("critical", outcome=ProbeOutcome(status=critical_status)),
            make_probe("info", Criticality.INFORMATIONAL, outcome=ProbeOutcome(status=info_status)),
        )
        report = asyncio.run(executor.run_all())
        assert report.overall_status == expected

    def test_report_keys_match_registry_in_order(self, make_probe):
        names = ["database", "redis", "ethereum", "solana", "process"]
        executor = _executor(*(make_probe(n) for n in names))
        report = asyncio.run(executor.run_all())

        assert list(report.per_probe) == names
        assert set(report.criticality) == set(names)

    def test_empty_registry_is_healthy(self):
        report = asyncio.run(_executor().run_all())
        assert report.overall_status == HealthStatus.HEALTHY
        assert report.per_probe == {}


# ============================================================================
# DEADLINES AND FAILURES
# ============================================================================

class TestDeadlines:

    def test_slow_probe_times_out(self, make_probe):
        executor = _executor(make_probe("database", delay=10.0))

        start = time.monotonic()
        report = asyncio.run(executor.run_all(deadline=0.2))
        elapsed = time.monotonic() - start

        outcome = report.per_probe["database"]
        assert outcome.status == HealthStatus.UNHEALTHY
        assert outcome.error == "Timeout"
        assert report.overall_status == HealthStatus.UNHEALTHY
        assert elapsed < 2.0

    def test_probe_timeout_shorter_than_deadline(self, make_probe):
        executor = _executor(make_probe("redis", delay=10.0, timeout_seconds=0.1))
        report = asyncio.run(executor.run_all(deadline=5.0))

        outcome = report.per_probe["redis"]
        assert outcome.error == "Timeout"
        assert outcome.latency_ms < 2000

    def test_one_slow_probe_does_not_delay_others(self, make_probe):
        fast = make_probe("database")
        slow = make_probe("ethereum", delay=10.0)
        executor = _executor(fast, slow)

        start = time.monotonic()
        report = asyncio.run(executor.run_all(deadline=0.3))
        elapsed = time.monotonic() - start

        assert report.per_probe["database"].status == HealthStatus.HEALTHY
        assert report.per_probe["ethereum"].error == "Timeout"
        assert elapsed < 2.0

    def test_probes_run_concurrently(self, make_probe):
        probes = [make_probe(f"p{i}", delay=0.2) for i in range(5)]
        executor = _executor(*probes)

        start = time.monotonic()
        report = asyncio.run(executor.run_all(deadline=2.0))
        elapsed = time.monotonic() - start

        assert report.is_healthy
        assert elapsed < 0.9


class TestFailureContainment:

    def test_raising_probe_becomes_unhealthy(self, make_probe):
        executor = _executor(
            make_probe("database", error=ConnectionError("connection refused")),
            make_probe("redis"),
        )
        report = asyncio.run(executor.run_all())

        outcome = report.per_probe["database"]
        assert outcome.status == HealthStatus.UNHEALTHY
        assert outcome.error == "connection refused"
        assert outcome.detail["exception_type"] == "ConnectionError"
        assert report.per_probe["redis"].status == HealthStatus.HEALTHY

    def test_wrong_return_type_becomes_unhealthy(self):
        class BadProbe(CallableProbe):
            async def check(self):
                return "ok"

        executor = _executor(BadProbe("bad", lambda: None))
        report = asyncio.run(executor.run_all())
        assert report.per_probe["bad"].status == HealthStatus.UNHEALTHY
        assert report.per_probe["bad"].detail["exception_type"] == "TypeError"

    def test_latency_is_recorded(self, make_probe):
        executor = _executor(make_probe("database", delay=0.05))
        report = asyncio.run(executor.run_all())
        assert report.per_probe["database"].latency_ms >= 40

    def test_shared_outcome_is_not_mutated(self):
        shared = ProbeOutcome.healthy(pool_size=5)
        executor = _executor(CallableProbe("database", lambda: shared))

        first = asyncio.run(executor.run_all()).per_probe["database"]
        second = asyncio.run(executor.run_all()).per_probe["database"]

        assert shared.latency_ms == 0.0
        assert shared.detail == {"pool_size": 5}
        assert first is not shared
        assert second is not first
        assert first.detail == {"pool_size": 5}


# ============================================================================
# SUBSETS
# ============================================================================

class TestSubsets:

    def test_run_critical_skips_informational(self, make_probe):
        info = make_probe("telegram", Criticality.INFORMATIONAL)
        critical = make_probe("database")
        executor = _executor(critical, info)

        report = asyncio.run(executor.run_critical())

        assert list(report.per_probe) == ["database"]
        assert critical.calls == 1
        assert info.calls == 0

    def test_run_single(self, make_probe):
        executor = _executor(make_probe("database"), make_probe("redis"))
        outcome = asyncio.run(executor.run_single("redis"))
        assert outcome.status == HealthStatus.HEALTHY

    def test_run_single_unknown(self):
        assert asyncio.run(_executor().run_single("nope")) is None

    def test_every_call_reruns_probes(self, make_probe):
        probe = make_probe("database")
        executor = _executor(probe)
        asyncio.run(executor.run_all())
        asyncio.run(executor.run_all())
        assert probe.calls == 2


# ============================================================================
# CALLABLE PROBES AND REPORT SERIALIZATION
# ============================================================================

class TestCallableProbe:

    def test_sync_function(self):
        probe = CallableProbe("server", lambda: {"ready": True})
        outcome = asyncio.run(probe.check())
        assert outcome.status == HealthStatus.HEALTHY
        assert outcome.detail == {"ready": True}

    def test_async_function(self):
        async def check():
            return ProbeOutcome.degraded("slow")

        outcome = asyncio.run(CallableProbe("svc", check).check())
        assert outcome.status == HealthStatus.DEGRADED

    def test_partial_of_async_function(self):
        async def check(url):
            return {"url": url}

        probe = CallableProbe("rpc", functools.partial(check, "https://rpc.example.com"))
        outcome = asyncio.run(probe.check())
        assert outcome.detail == {"url": "https://rpc.example.com"}

    def test_lambda_returning_coroutine(self):
        async def check():
            return False

        outcome = asyncio.run(CallableProbe("svc", lambda: check()).check())
        assert outcome.status == HealthStatus.UNHEALTHY

    def test_false_is_unhealthy(self):
        outcome = asyncio.run(CallableProbe("flag", lambda: False).check())
        assert outcome.status == HealthStatus.UNHEALTHY

    def test_none_is_healthy(self):
        outcome = asyncio.run(CallableProbe("noop", lambda: None).check())
        assert outcome.status == HealthStatus.HEALTHY

    def test_unsupported_result_raises(self):
        with pytest.raises(TypeError):
            asyncio.run(CallableProbe("bad", lambda: 42).check())


class TestReportSerialization:

    def test_to_dict_shape(self, make_probe):
        executor = _executor(
            make_probe("database", outcome=ProbeOutcome.healthy(pool_size=5)),
            make_probe("process", Criticality.INFORMATIONAL),
        )
        body = asyncio.run(executor.run_all()).to_dict()

        assert body["status"] == "healthy"
        assert body["timestamp"].endswith("Z")
        assert body["memory"]["unit"] == "MB"
        assert isinstance(body["uptime"], int)
        assert body["checks"]["database"]["criticality"] == "critical"
        assert body["checks"]["database"]["detail"] == {"pool_size": 5}
        assert body["checks"]["process"]["criticality"] == "informational"

    def test_status_values_serialize_as_plain_strings(self):
        assert json.dumps([s.value for s in HealthStatus]) == '["healthy", "degraded", "unhealthy"]'
        assert HealthStatus("degraded") is HealthStatus.DEGRADED
