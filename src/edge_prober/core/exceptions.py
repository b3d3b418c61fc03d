"""Custom exceptions for Edge Prober.

This module provides a hierarchy of specific exceptions. Per-target probe
failures are raised and caught inside the prober and collapsed into a
``ProbeOutcome``; only configuration problems and socket exhaustion reach
the caller.
"""

from __future__ import annotations


class EdgeProberError(Exception):
    """Base exception for all Edge Prober errors.

    All custom exceptions inherit from this class, allowing callers to
    catch all Edge Prober-specific errors with a single except clause.
    """
    pass


class ConfigError(EdgeProberError):
    """Raised when settings cannot be loaded or are invalid."""
    pass


class TargetFileError(ConfigError):
    """Raised when a target file is missing or malformed.

    The message names the file and the offending line or entry.
    """
    pass


class ProbeError(EdgeProberError):
    """Raised during a single reachability probe.

    This includes failures in:
    - Hostname resolution
    - TCP connection establishment
    - UDP datagram emission
    """
    pass


class ResolutionError(ProbeError):
    """Raised when the platform resolver cannot resolve a hostname."""
    pass


class ConnectFailure(ProbeError):
    """Raised when a TCP handshake is refused or the host is unreachable."""
    pass


class ProbeTimeoutError(ProbeError):
    """Raised when a probe does not complete within its timeout."""
    pass


class LocalSendError(ProbeError):
    """Raised when the local stack cannot emit a UDP datagram."""
    pass


class UnknownProtocolError(ProbeError):
    """Raised when a target names a protocol other than TCP or UDP."""
    pass


class SocketAllocationError(ProbeError):
    """Raised when the OS refuses to create a socket at all.

    Unlike the other probe errors this one is fatal and aborts the run.
    """
    pass
