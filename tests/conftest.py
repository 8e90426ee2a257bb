from __future__ import annotations

import importlib
import os
import socket
import threading
import time

import pytest
import uvicorn

from masterstat.config.settings import get_settings
from services.master_sim.client import MasterSimClient


def _free_port(kind: int) -> int:
    with socket.socket(socket.AF_INET, kind) as s:
        s.bind(("127.0.0.1", 0))
        return s.getsockname()[1]


def _wait_for_server_ready(server: uvicorn.Server, thread: threading.Thread, timeout_s: float = 15.0) -> None:
    """
    Wait for uvicorn to finish startup (UDP endpoint included). If the thread dies, fail loudly.
    """
    deadline = time.time() + timeout_s
    while time.time() < deadline:
        if server.started:
            return
        if not thread.is_alive():
            raise RuntimeError("Master simulator exited during startup")
        time.sleep(0.05)
    raise RuntimeError(f"Master simulator did not become ready within {timeout_s}s")


@pytest.fixture(scope="session")
def simulator_server():
    """
    Runs the master simulator in-process for the test session, on free ports.
    """
    host = "127.0.0.1"
    http_port = _free_port(socket.SOCK_STREAM)
    udp_port = _free_port(socket.SOCK_DGRAM)

    os.environ["MASTER_SIM_HTTP"] = f"http://{host}:{http_port}"
    os.environ["MASTER_SIM_UDP_HOST"] = host
    os.environ["MASTER_SIM_UDP_PORT"] = str(udp_port)

    # settings are read at import time
    main = importlib.import_module("services.master_sim.app.main")

    server = uvicorn.Server(uvicorn.Config(main.app, host=host, port=http_port, log_level="warning"))
    thread = threading.Thread(target=server.run, name="master-sim", daemon=True)
    thread.start()

    try:
        _wait_for_server_ready(server, thread)
        yield server
    finally:
        server.should_exit = True
        thread.join(timeout=5)


@pytest.fixture
def settings(simulator_server):
    return get_settings()


@pytest.fixture
def sim_api(settings):
    """
    Control-plane client. Each test starts from a clean simulator.
    """
    client = MasterSimClient(settings.sim_http)
    client.reset()
    try:
        yield client
    finally:
        client.close()


@pytest.fixture
def sim_master(settings) -> str:
    return f"{settings.sim_udp_host}:{settings.sim_udp_port}"


class FakeMaster:
    """
    Minimal UDP master on a background thread: answers every datagram with `reply`
    after `delay_s`, or never answers when `reply` is None.
    """

    def __init__(self, reply: bytes | None, delay_s: float = 0.0):
        self.reply = reply
        self.delay_s = delay_s
        self.requests: list[bytes] = []
        self._sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        self._sock.bind(("127.0.0.1", 0))
        self._sock.settimeout(0.05)
        self._stop = threading.Event()
        self._thread = threading.Thread(target=self._serve, daemon=True)

    @property
    def address(self) -> str:
        host, port = self._sock.getsockname()
        return f"{host}:{port}"

    def start(self) -> "FakeMaster":
        self._thread.start()
        return self

    def stop(self) -> None:
        self._stop.set()
        self._thread.join(timeout=2)
        self._sock.close()

    def _serve(self) -> None:
        while not self._stop.is_set():
            try:
                data, addr = self._sock.recvfrom(2048)
            except socket.timeout:
                continue
            self.requests.append(data)
            if self.reply is None:
                continue
            if self.delay_s:
                time.sleep(self.delay_s)
            self._sock.sendto(self.reply, addr)


@pytest.fixture
def fake_master():
    started = []

    def _make(reply: bytes | None, delay_s: float = 0.0) -> FakeMaster:
        m = FakeMaster(reply, delay_s).start()
        started.append(m)
        return m

    try:
        yield _make
    finally:
        for m in started:
            m.stop()
