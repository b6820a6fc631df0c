# ============================================================================
# SHARED TEST FIXTURES
# ============================================================================
# STATUS: Tests - Stub probes and runtime builders
# PURPOSE: Deterministic probes with call counters for health tests
# CREATED: 18 OCT 2026
# ============================================================================
"""
Shared fixtures for the health tests.

StubProbe answers with a fixed outcome, optionally after a delay or by
raising, and counts how many times it was invoked.
"""

import asyncio
from dataclasses import replace
from typing import Optional

import pytest

from health import Criticality, Probe, ProbeOutcome, ServiceRuntime


class StubProbe(Probe):
    """Probe with a scripted answer and an invocation counter."""

    def __init__(
        self,
        name: str,
        criticality: Criticality = Criticality.CRITICAL,
        outcome: Optional[ProbeOutcome] = None,
        delay: float = 0.0,
        error: Optional[Exception] = None,
        timeout_seconds: float = 5.0,
    ):
        self.name = name
        self.criticality = criticality
        self.timeout_seconds = timeout_seconds
        self.outcome = outcome or ProbeOutcome.healthy()
        self.delay = delay
        self.error = error
        self.calls = 0

    async def check(self) -> ProbeOutcome:
        self.calls += 1
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return replace(self.outcome, detail=dict(self.outcome.detail))


@pytest.fixture
def make_probe():
    """Factory for StubProbe instances."""
    return StubProbe


@pytest.fixture
def make_runtime():
    """Factory for a ServiceRuntime with the given probes registered."""

    def _make(*probes, **kwargs):
        kwargs.setdefault("service_name", "test-service")
        runtime = ServiceRuntime(**kwargs)
        for probe in probes:
            runtime.register_probe(probe)
        return runtime

    return _make
