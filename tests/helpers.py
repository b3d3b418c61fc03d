"""Test helpers for Edge Prober tests.

Socket doubles used to exercise prober error paths without a network.
"""

import socket


class FakeSocket:
    """Stand-in for socket.socket that records calls and tracks close()."""

    instances: list["FakeSocket"] = []

    def __init__(self, family=None, type=None, proto=0, connect_error=None, send_result=1, send_error=None):
        self.family = family
        self.type = type
        self.proto = proto
        self.connect_error = connect_error
        self.send_result = send_result
        self.send_error = send_error
        self.timeout = None
        self.connected_to = None
        self.sent: list[bytes] = []
        self.closed = False
        FakeSocket.instances.append(self)

    def settimeout(self, value):
        self.timeout = value

    def connect(self, address):
        if self.connect_error is not None:
            raise self.connect_error
        self.connected_to = address

    def send(self, data):
        if self.send_error is not None:
            raise self.send_error
        self.sent.append(data)
        return self.send_result

    def close(self):
        self.closed = True

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
        return False


def fake_addrinfo(socktype=socket.SOCK_STREAM, count=1, port=7844):
    """Addresses in getaddrinfo() format on 192.0.2.x (TEST-NET-1)."""
    return [
        (socket.AF_INET, socktype, 0, "", (f"192.0.2.{i + 1}", port))
        for i in range(count)
    ]
