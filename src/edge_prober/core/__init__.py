"""Core module - Configuration, models, targets, and orchestration."""

from edge_prober.core.config import Settings
from edge_prober.core.models import (
    ProbeOutcome,
    ProbeResult,
    ProbeTarget,
    Protocol,
    RunReport,
)
from edge_prober.core.targets import DEFAULT_TARGETS, load_targets

__all__ = [
    "Settings",
    "Protocol",
    "ProbeOutcome",
    "ProbeTarget",
    "ProbeResult",
    "RunReport",
    "DEFAULT_TARGETS",
    "load_targets",
]
