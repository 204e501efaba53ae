from __future__ import annotations

import socket
from contextlib import nullcontext

import pytest

from survivorship.web.run_server import _docs_host, find_available_port


def _busy_ports(monkeypatch: pytest.MonkeyPatch, busy: set[int]) -> list[int]:
    probed: list[int] = []

    def create_server(addr, reuse_port=False):
        probed.append(addr[1])
        if addr[1] in busy:
            raise OSError(f"port {addr[1]} taken")
        return nullcontext()

    monkeypatch.setattr(socket, "create_server", create_server)
    return probed


def test_requested_port_used_when_free(monkeypatch: pytest.MonkeyPatch):
    probed = _busy_ports(monkeypatch, set())
    assert find_available_port("127.0.0.1", 8000) == (8000, False)
    assert probed == [8000]


def test_skips_busy_ports(monkeypatch: pytest.MonkeyPatch):
    probed = _busy_ports(monkeypatch, {8000, 8001})
    assert find_available_port("127.0.0.1", 8000, max_tries=5) == (8002, True)
    assert probed == [8000, 8001, 8002]


def test_reports_exhausted_range(monkeypatch: pytest.MonkeyPatch):
    _busy_ports(monkeypatch, {9000, 9001, 9002})
    with pytest.raises(RuntimeError, match="9000-9002"):
        find_available_port("127.0.0.1", 9000, max_tries=3)


def test_rejects_non_positive_tries():
    with pytest.raises(ValueError):
        find_available_port("127.0.0.1", 9000, max_tries=0)


@pytest.mark.parametrize("host,expected", [("0.0.0.0", "127.0.0.1"), ("::", "127.0.0.1"), ("localhost", "localhost")])
def test_docs_host(host, expected):
    assert _docs_host(host) == expected
