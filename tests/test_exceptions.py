"""Tests for custom exceptions module."""

import pytest

from edge_prober.core.exceptions import (
    ConfigError,
    ConnectFailure,
    EdgeProberError,
    LocalSendError,
    ProbeError,
    ProbeTimeoutError,
    ResolutionError,
    SocketAllocationError,
    TargetFileError,
    UnknownProtocolError,
)


class TestExceptionHierarchy:
    """Tests for exception inheritance structure."""

    def test_base_exception_inherits_from_exception(self):
        """EdgeProberError should inherit from Exception."""
        assert issubclass(EdgeProberError, Exception)

    def test_config_error_inherits_from_base(self):
        """ConfigError should inherit from EdgeProberError."""
        assert issubclass(ConfigError, EdgeProberError)

    def test_target_file_error_inherits_from_config(self):
        """TargetFileError should inherit from ConfigError."""
        assert issubclass(TargetFileError, ConfigError)
        assert issubclass(TargetFileError, EdgeProberError)

    def test_probe_error_inherits_from_base(self):
        """ProbeError should inherit from EdgeProberError."""
        assert issubclass(ProbeError, EdgeProberError)

    @pytest.mark.parametrize(
        "error_cls",
        [
            ResolutionError,
            ConnectFailure,
            ProbeTimeoutError,
            LocalSendError,
            UnknownProtocolError,
            SocketAllocationError,
        ],
    )
    def test_probe_errors_inherit_from_probe(self, error_cls):
        """Every per-target error should be a ProbeError."""
        assert issubclass(error_cls, ProbeError)

    def test_connect_failure_does_not_shadow_builtin(self):
        """ConnectFailure should not be confused with the builtin ConnectionError."""
        assert not issubclass(ConnectFailure, ConnectionError)


class TestExceptionCatching:
    """Tests for catching exceptions at different levels."""

    def test_catch_probe_error_catches_subclasses(self):
        """Catching ProbeError should catch all probe failures."""
        with pytest.raises(ProbeError):
            raise ResolutionError("no such host")

        with pytest.raises(ProbeError):
            raise LocalSendError("send failed")

    def test_catch_base_catches_all(self):
        """Catching EdgeProberError should catch all custom exceptions."""
        with pytest.raises(EdgeProberError):
            raise TargetFileError("bad line")

        with pytest.raises(EdgeProberError):
            raise SocketAllocationError("EMFILE")

    def test_exception_message(self):
        """Exception should preserve error message."""
        error_msg = "TCP connect to 192.0.2.1:7844 timed out after 3.0s"
        try:
            raise ProbeTimeoutError(error_msg)
        except ProbeTimeoutError as e:
            assert str(e) == error_msg

    def test_exception_can_wrap_cause(self):
        """Exception should be able to wrap original cause."""
        original = OSError("Network is unreachable")
        try:
            try:
                raise original
            except OSError as e:
                raise LocalSendError("UDP send failed") from e
        except LocalSendError as e:
            assert e.__cause__ is original
