"""Edge Prober - TCP/UDP reachability checks for the Cloudflare edge."""

__version__ = "1.0.0"
__author__ = "Edge Prober Maintainers"

from edge_prober.core.config import Settings
from edge_prober.core.models import ProbeOutcome, ProbeResult, ProbeTarget, RunReport

__all__ = [
    "Settings",
    "ProbeTarget",
    "ProbeResult",
    "ProbeOutcome",
    "RunReport",
]
