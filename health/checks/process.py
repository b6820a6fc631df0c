# ============================================================================
# PROCESS PROBE
# ============================================================================
# STATUS: Health - Process self-check
# PURPOSE: Report process identity, uptime and memory
# CREATED: 18 OCT 2026
# ============================================================================
"""
Process Probe

Always healthy if the check runs (proves the event loop is responsive).
Informational: it carries the memory/uptime figures the services used to
put in their health payload.
"""

import os
import platform
import sys

from health.core import (
    Criticality,
    Probe,
    ProbeOutcome,
    process_memory,
    process_uptime_seconds,
)


class ProcessProbe(Probe):
    """Basic process health."""

    name = "process"
    criticality = Criticality.INFORMATIONAL
    timeout_seconds = 1.0

    def __init__(self, **extra_detail):
        self._extra_detail = extra_detail

    async def check(self) -> ProbeOutcome:
        return ProbeOutcome.healthy(
            message="Process running",
            pid=os.getpid(),
            python_version=sys.version.split()[0],
            platform=platform.platform(),
            uptime=round(process_uptime_seconds()),
            memory=process_memory(),
            **self._extra_detail,
        )


__all__ = [
    "ProcessProbe",
]
