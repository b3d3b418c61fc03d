"""Orchestrator for a single probe run."""

from __future__ import annotations

import time
import uuid
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Iterable, Optional

from edge_prober.core.config import Settings
from edge_prober.core.logging import get_logger
from edge_prober.core.models import ProbeResult, ProbeTarget, RunReport
from edge_prober.prober.engine import ProberEngine

if TYPE_CHECKING:
    from edge_prober.reports.console import ConsoleReporter

logger = get_logger(__name__)


class ProbeRunOrchestrator:
    """Runs every target through the prober and collects a RunReport."""

    def __init__(self, settings: Settings, engine: Optional[ProberEngine] = None):
        self.settings = settings
        self.engine = engine or ProberEngine(settings.prober)

    def run(
        self,
        targets: Iterable[ProbeTarget],
        reporter: Optional["ConsoleReporter"] = None,
    ) -> RunReport:
        """Probe all targets in order.

        Args:
            targets: Targets to probe
            reporter: Optional console reporter fed as the run progresses

        Returns:
            RunReport with one result per target, in target order
        """
        targets = list(targets)
        run_id = str(uuid.uuid4())[:8]
        started_at = datetime.now(timezone.utc)
        start_time = time.time()

        logger.info("run_started", run_id=run_id, targets=len(targets))

        if reporter is not None:
            reporter.header()

        results: list[ProbeResult] = []
        on_start = reporter.start if reporter is not None else None
        for result in self.engine.run(targets, on_probe_start=on_start):
            results.append(result)
            if reporter is not None:
                reporter.finish(result)

        report = RunReport(
            run_id=run_id,
            started_at=started_at,
            completed_at=datetime.now(timezone.utc),
            duration_seconds=time.time() - start_time,
            results=results,
        )

        if reporter is not None:
            reporter.summary(report)

        logger.info("run_completed", **report.summary())
        return report
