"""Application notifications – NotificationServer (uvicorn on a daemon thread)."""
from __future__ import annotations

import socket
import threading
import time

import uvicorn
from fastapi import FastAPI

from alertcron.kernel.errors import BrowserNotifierError
from alertcron.observability.logging import get_logger

__all__ = ["NotificationServer", "split_host"]

_log = get_logger(__name__)


def split_host(host: str) -> tuple[str, int]:
    """Split ``host:port`` (port ``0`` or missing picks a free port)."""
    name, sep, port = host.rpartition(":")
    if not sep:
        return host or "localhost", 0
    try:
        return name or "localhost", int(port or 0)
    except ValueError as exc:
        raise BrowserNotifierError(f"invalid listen address {host!r}", cause=exc) from exc


class NotificationServer:
    """Serve *app* on *host* for the rest of the process.

    :meth:`start` binds the socket itself so the real address is known up
    front, then blocks until uvicorn reports it is accepting connections.
    There is no stop: the thread is a daemon and dies with the process.
    """

    def __init__(self, app: FastAPI, host: str, ready_timeout: float = 10.0) -> None:
        self._app = app
        self._host = host
        self._ready_timeout = ready_timeout
        self._server: uvicorn.Server | None = None
        self._thread: threading.Thread | None = None
        self.address: str | None = None

    @property
    def started(self) -> bool:
        return self._server is not None and self._server.started

    def start(self) -> str:
        if self.address is not None:
            return self.address

        name, port = split_host(self._host)
        try:
            sock = socket.create_server((name, port))
        except OSError as exc:
            raise BrowserNotifierError(f"could not listen on {self._host}: {exc}", cause=exc) from exc
        bound_host, bound_port = sock.getsockname()[:2]

        config = uvicorn.Config(self._app, log_level="warning", server_header=False, lifespan="off")
        server = uvicorn.Server(config)
        thread = threading.Thread(
            target=server.run,
            kwargs={"sockets": [sock]},
            name="alertcron-notifications",
            daemon=True,
        )
        thread.start()

        deadline = time.monotonic() + self._ready_timeout
        while not server.started:
            if not thread.is_alive():
                raise BrowserNotifierError(f"notification server on {self._host} exited during startup")
            if time.monotonic() > deadline:
                raise BrowserNotifierError(f"notification server on {self._host} not ready after {self._ready_timeout:g}s")
            time.sleep(0.01)

        self._server = server
        self._thread = thread
        self.address = f"{bound_host}:{bound_port}"
        _log.info("notifications.server_started", address=self.address)
        return self.address
