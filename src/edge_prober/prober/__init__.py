"""Prober module - TCP/UDP reachability checks."""

from edge_prober.prober.engine import ProberEngine

__all__ = [
    "ProberEngine",
]
