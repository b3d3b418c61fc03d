"""Blocking TCP/UDP reachability prober."""

from __future__ import annotations

import errno
import socket
import time
from typing import Callable, Iterable, Iterator, Optional

from edge_prober.core.config import ProberSettings
from edge_prober.core.exceptions import (
    ConnectFailure,
    LocalSendError,
    ProbeError,
    ProbeTimeoutError,
    ResolutionError,
    SocketAllocationError,
    UnknownProtocolError,
)
from edge_prober.core.logging import get_logger
from edge_prober.core.models import ProbeOutcome, ProbeResult, ProbeTarget, Protocol

logger = get_logger(__name__)

# errno values meaning the process or system is out of socket resources
_ALLOCATION_ERRNOS = frozenset(
    code
    for code in (
        getattr(errno, "EMFILE", None),
        getattr(errno, "ENFILE", None),
        getattr(errno, "ENOBUFS", None),
        getattr(errno, "ENOMEM", None),
    )
    if code is not None
)


class ProberEngine:
    """
    Sequential reachability checker for TCP and UDP targets.

    Features:
    - TCP: PASSED iff a handshake completes within the TCP timeout
    - UDP: PASSED iff a one-byte datagram is handed to the local stack
    - Unknown protocols are skipped without any socket I/O
    - Every socket is closed before ``probe`` returns
    """

    def __init__(self, settings: ProberSettings | None = None):
        self.settings = settings or ProberSettings()

    def run(
        self,
        targets: Iterable[ProbeTarget],
        on_probe_start: Optional[Callable[[ProbeTarget], None]] = None,
    ) -> Iterator[ProbeResult]:
        """
        Probe targets one at a time, yielding results in target order.

        Args:
            targets: Targets to probe
            on_probe_start: Called with each target right before it is probed

        Yields:
            One ProbeResult per target
        """
        for target in targets:
            if on_probe_start is not None:
                on_probe_start(target)
            yield self.probe(target)

    def probe(self, target: ProbeTarget) -> ProbeResult:
        """
        Probe a single target.

        Every per-target error becomes FAILED. Only SocketAllocationError
        propagates, since no later target could be probed either.
        """
        start_time = time.perf_counter()
        protocol = target.known_protocol

        try:
            if protocol is Protocol.TCP:
                self._probe_tcp(target)
            elif protocol is Protocol.UDP:
                self._probe_udp(target)
            else:
                raise UnknownProtocolError(f"Unknown protocol '{target.protocol}'")
        except SocketAllocationError:
            logger.error("socket_allocation_failed", target=str(target))
            raise
        except UnknownProtocolError as e:
            logger.warning("probe_skipped", target=str(target), protocol=target.protocol)
            return ProbeResult(
                target=target,
                outcome=ProbeOutcome.SKIPPED_UNKNOWN_PROTOCOL,
                elapsed_ms=self._elapsed_ms(start_time),
                detail=str(e),
            )
        except ProbeError as e:
            elapsed = self._elapsed_ms(start_time)
            logger.debug(
                "probe_failed",
                target=str(target),
                reason=type(e).__name__,
                error=str(e),
                elapsed_ms=elapsed,
            )
            return ProbeResult(
                target=target,
                outcome=ProbeOutcome.FAILED,
                elapsed_ms=elapsed,
                detail=str(e),
            )

        elapsed = self._elapsed_ms(start_time)
        logger.debug("probe_passed", target=str(target), elapsed_ms=elapsed)
        return ProbeResult(
            target=target,
            outcome=ProbeOutcome.PASSED,
            elapsed_ms=elapsed,
        )

    def _probe_tcp(self, target: ProbeTarget) -> None:
        """Complete a TCP handshake with any resolved address."""
        addresses = self._resolve(target, socket.SOCK_STREAM)
        timeout = self.settings.tcp_timeout

        last_error: ProbeError | None = None
        for family, socktype, proto, _, sockaddr in addresses:
            # SocketAllocationError is not a ConnectFailure and still escapes.
            try:
                sock = self._open_socket(family, socktype, proto)
            except ConnectFailure as e:
                last_error = e
                continue
            with sock:
                sock.settimeout(timeout)
                try:
                    sock.connect(sockaddr)
                    return
                except socket.timeout:
                    last_error = ProbeTimeoutError(
                        f"TCP connect to {sockaddr[0]}:{sockaddr[1]} timed out after {timeout}s"
                    )
                except OSError as e:
                    last_error = ConnectFailure(
                        f"TCP connect to {sockaddr[0]}:{sockaddr[1]} failed: {e}"
                    )

        raise last_error or ConnectFailure(f"No usable address for {target.hostname}")

    def _probe_udp(self, target: ProbeTarget) -> None:
        """Hand a one-byte datagram to the local stack.

        A successful send says nothing about whether anything listens on
        the remote port.
        """
        family, socktype, proto, _, sockaddr = self._resolve(target, socket.SOCK_DGRAM)[0]

        with self._open_socket(family, socktype, proto) as sock:
            sock.settimeout(self.settings.udp_timeout)
            try:
                sock.connect(sockaddr)
                sent = sock.send(self.settings.udp_payload)
            except socket.timeout as e:
                raise ProbeTimeoutError(
                    f"UDP send to {sockaddr[0]}:{sockaddr[1]} timed out"
                ) from e
            except OSError as e:
                raise LocalSendError(
                    f"UDP send to {sockaddr[0]}:{sockaddr[1]} failed: {e}"
                ) from e

        if sent <= 0:
            raise LocalSendError(f"UDP send to {sockaddr[0]}:{sockaddr[1]} sent no data")

    def _resolve(self, target: ProbeTarget, socktype: int) -> list[tuple]:
        """Resolve a target through the platform resolver."""
        try:
            addresses = socket.getaddrinfo(
                target.hostname,
                target.port,
                socket.AF_UNSPEC,
                socktype,
            )
        except (socket.gaierror, UnicodeError, OSError) as e:
            raise ResolutionError(f"Could not resolve '{target.hostname}': {e}") from e

        if not addresses:
            raise ResolutionError(f"No addresses for '{target.hostname}'")
        return addresses

    @staticmethod
    def _open_socket(family: int, socktype: int, proto: int) -> socket.socket:
        try:
            return socket.socket(family, socktype, proto)
        except OSError as e:
            if e.errno in _ALLOCATION_ERRNOS:
                raise SocketAllocationError(f"Cannot allocate socket: {e}") from e
            raise ConnectFailure(f"Cannot open socket: {e}") from e

    @staticmethod
    def _elapsed_ms(start_time: float) -> float:
        return round((time.perf_counter() - start_time) * 1000, 3)
