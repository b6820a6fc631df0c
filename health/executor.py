# ============================================================================
# PROBE EXECUTOR
# ============================================================================
# STATUS: Core - Concurrent probe execution
# PURPOSE: Run probes under one batch deadline and fold the results
# CREATED: 18 OCT 2026
# ============================================================================
"""
Probe Executor

Executes registered probes with:
- One task per probe, all started at once
- Per-probe timeout capped by the batch deadline
- A hard batch deadline: stragglers are cancelled and recorded as Timeout
- Failure containment: a raising probe becomes an unhealthy outcome

Aggregation:
    overall = UNHEALTHY iff any critical probe is not HEALTHY
    informational probes never change the overall status

The executor keeps no state between runs, so concurrent /health and
/ready requests can share one instance.
"""

import asyncio
import logging
import time
from dataclasses import replace
from typing import Dict, Iterable, Optional

from health.core import (
    Criticality,
    HealthReport,
    HealthStatus,
    Probe,
    ProbeOutcome,
)
from health.errors import ProbeError, ProbeTimeoutError
from health.registry import ProbeRegistry

logger = logging.getLogger(__name__)


class ProbeExecutor:
    """
    Executes probes concurrently and builds a HealthReport.

    Args:
        registry: Probe registry to draw probes from
        default_deadline: Batch deadline used when run_all() gets none
    """

    def __init__(
        self,
        registry: ProbeRegistry,
        default_deadline: float = 5.0,
    ):
        self.registry = registry
        self.default_deadline = default_deadline

    async def run_all(
        self,
        deadline: Optional[float] = None,
        criticality: Optional[Criticality] = None,
    ) -> HealthReport:
        """
        Execute registered probes and aggregate them.

        Args:
            deadline: Seconds the whole batch may take
            criticality: Only run probes of this tier (None runs all)

        Returns:
            HealthReport whose per_probe keys are exactly the probes run,
            in registry order. Never raises for probe failures.
        """
        deadline = self.default_deadline if deadline is None else deadline
        probes = self.registry.list()
        if criticality is not None:
            probes = tuple(p for p in probes if p.criticality == criticality)

        start_time = time.monotonic()
        outcomes = await self._execute_batch(probes, deadline)
        total_duration_ms = (time.monotonic() - start_time) * 1000

        return self._build_report(probes, outcomes, total_duration_ms)

    async def run_critical(self, deadline: Optional[float] = None) -> HealthReport:
        """Execute only critical probes. Used by the readiness endpoint."""
        return await self.run_all(deadline, criticality=Criticality.CRITICAL)

    async def run_single(
        self,
        name: str,
        deadline: Optional[float] = None,
    ) -> Optional[ProbeOutcome]:
        """Execute a single probe by name. Returns None if not registered."""
        probe = self.registry.get(name)
        if probe is None:
            return None

        deadline = self.default_deadline if deadline is None else deadline
        outcomes = await self._execute_batch((probe,), deadline)
        return outcomes[probe.name]

    async def _execute_batch(
        self,
        probes: Iterable[Probe],
        deadline: float,
    ) -> Dict[str, ProbeOutcome]:
        """Run probes in parallel; return by the deadline no matter what."""
        probes = tuple(probes)
        if not probes:
            return {}

        tasks = {
            asyncio.create_task(self._execute_probe(probe, deadline)): probe
            for probe in probes
        }

        done, pending = await asyncio.wait(tasks.keys(), timeout=deadline)

        # Abandon stragglers; their late results are discarded
        for task in pending:
            task.cancel()

        outcomes: Dict[str, ProbeOutcome] = {}
        for task in done:
            probe = tasks[task]
            try:
                outcomes[probe.name] = task.result()
            except Exception as e:
                logger.error(f"Error collecting probe result {probe.name}: {e}")
                outcomes[probe.name] = ProbeOutcome.from_exception(e)

        for task in pending:
            probe = tasks[task]
            logger.warning(
                f"Probe {probe.name} still running at batch deadline ({deadline}s)"
            )
            outcomes[probe.name] = replace(ProbeOutcome.timed_out(), latency_ms=deadline * 1000)

        return outcomes

    async def _execute_probe(
        self,
        probe: Probe,
        deadline: float,
    ) -> ProbeOutcome:
        """Execute a single probe with its effective timeout."""
        timeout = min(probe.timeout_seconds, deadline)
        start_time = time.monotonic()

        try:
            outcome = await asyncio.wait_for(probe.check(), timeout=timeout)
            if not isinstance(outcome, ProbeOutcome):
                raise TypeError(
                    f"check() returned {type(outcome).__name__}, expected ProbeOutcome"
                )

        except asyncio.TimeoutError:
            error = ProbeTimeoutError(probe.name, timeout)
            logger.warning(f"Probe {probe.name} timed out after {timeout}s")
            outcome = replace(ProbeOutcome.timed_out(), error=str(error))

        except Exception as e:
            error = ProbeError(probe.name, e)
            logger.error(f"Probe {probe.name} failed: {error}")
            outcome = ProbeOutcome.from_exception(e)

        # Copy so a shared outcome returned by check() is never mutated
        outcome = replace(
            outcome,
            detail=dict(outcome.detail),
            latency_ms=(time.monotonic() - start_time) * 1000,
        )
        logger.debug(
            f"Probe {probe.name}: {outcome.status.value} ({outcome.latency_ms:.1f}ms)"
        )
        return outcome

    def _build_report(
        self,
        probes: Iterable[Probe],
        outcomes: Dict[str, ProbeOutcome],
        total_duration_ms: float,
    ) -> HealthReport:
        """Order outcomes by registry order and derive overall status."""
        per_probe: Dict[str, ProbeOutcome] = {}
        criticality: Dict[str, Criticality] = {}
        overall = HealthStatus.HEALTHY

        for probe in probes:
            outcome = outcomes.get(probe.name) or ProbeOutcome.timed_out()
            per_probe[probe.name] = outcome
            criticality[probe.name] = probe.criticality
            if probe.is_critical and outcome.status != HealthStatus.HEALTHY:
                overall = HealthStatus.UNHEALTHY

        return HealthReport(
            overall_status=overall,
            per_probe=per_probe,
            criticality=criticality,
            total_duration_ms=total_duration_ms,
        )


__all__ = [
    "ProbeExecutor",
]
