"""Test configuration and fixtures for Edge Prober."""

import logging
import socket
from pathlib import Path

import pytest
import structlog

from edge_prober.core.config import ProberSettings, Settings
from edge_prober.core.models import ProbeTarget
from edge_prober.prober.engine import ProberEngine

from helpers import FakeSocket


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers installed by configure_logging between tests."""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in list(root.handlers):
        if isinstance(handler, (logging.FileHandler, logging.StreamHandler)) \
                and type(handler).__module__ == "logging":
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
    structlog.reset_defaults()


@pytest.fixture
def settings() -> Settings:
    """Default settings for testing."""
    return Settings()


@pytest.fixture
def prober_settings() -> ProberSettings:
    """Short timeouts so failing probes do not slow the suite down."""
    return ProberSettings(tcp_timeout=1.0, udp_timeout=1.0)


@pytest.fixture
def engine(prober_settings: ProberSettings) -> ProberEngine:
    return ProberEngine(prober_settings)


@pytest.fixture
def tcp_listener() -> int:
    """Port of a loopback TCP socket that is listening (never accepts)."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(("127.0.0.1", 0))
    sock.listen(16)
    try:
        yield sock.getsockname()[1]
    finally:
        sock.close()


@pytest.fixture
def closed_tcp_port() -> int:
    """A loopback port that nothing listens on."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(("127.0.0.1", 0))
    port = sock.getsockname()[1]
    sock.close()
    return port


@pytest.fixture
def udp_listener() -> int:
    """Port of a bound loopback UDP socket."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    sock.bind(("127.0.0.1", 0))
    try:
        yield sock.getsockname()[1]
    finally:
        sock.close()


@pytest.fixture
def mixed_targets(tcp_listener: int, closed_tcp_port: int) -> list[ProbeTarget]:
    """Open listener, closed port, and an unresolvable UDP host."""
    return [
        ProbeTarget(hostname="localhost", port=tcp_listener, protocol="TCP", description="local echo"),
        ProbeTarget(hostname="localhost", port=closed_tcp_port, protocol="TCP", description="closed"),
        ProbeTarget(hostname="256.256.256.256", port=53, protocol="UDP", description="bad host"),
    ]


@pytest.fixture
def targets_csv(tmp_path: Path, mixed_targets: list[ProbeTarget]) -> Path:
    """Line-format target file for the mixed targets."""
    lines = ["# hostname,port,protocol,description", ""]
    lines += [
        f"{t.hostname},{t.port},{t.protocol},{t.description}" for t in mixed_targets
    ]
    path = tmp_path / "targets.csv"
    path.write_text("\n".join(lines) + "\n")
    return path


@pytest.fixture
def fake_socket_factory():
    """Build FakeSocket classes with preset behaviour; tracks every instance."""
    FakeSocket.instances = []

    def factory(**behaviour):
        def make(family=None, type=None, proto=0):
            return FakeSocket(family, type, proto, **behaviour)
        return make

    yield factory
    FakeSocket.instances = []
