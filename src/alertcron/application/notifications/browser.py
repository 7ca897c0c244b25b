"""Application notifications – BrowserNotifier."""
from __future__ import annotations

import asyncio
import webbrowser
from dataclasses import dataclass
from typing import Callable

from alertcron.application.notifications.page import PageState, create_app
from alertcron.application.notifications.server import NotificationServer
from alertcron.kernel.errors import BrowserNotifierError

__all__ = ["BrowserNotification", "BrowserNotifier", "UrlOpener"]

UrlOpener = Callable[[str], bool]


@dataclass(frozen=True)
class BrowserNotification:
    """Local popup settings.

    ``timeout_seconds``, when set, closes the OS notification after that long
    and the browser tab three seconds later.
    """

    host: str = "localhost:8082"
    message: str = "alertcron notification"
    timeout_seconds: float | None = None


class BrowserNotifier:
    """Show a job failure in a local browser tab plus an OS notification."""

    def __init__(
        self,
        config: BrowserNotification,
        opener: UrlOpener | None = None,
        ready_timeout: float = 10.0,
    ) -> None:
        self.config = config
        self.state = PageState(config.message, config.timeout_seconds)
        self._opener = opener or webbrowser.open
        self._server = NotificationServer(create_app(self.state), config.host, ready_timeout)

    @property
    def address(self) -> str | None:
        return self._server.address

    @property
    def url(self) -> str | None:
        return f"http://{self.address}/" if self.address else None

    def start(self) -> str:
        """Start the presentation endpoint; returns once it accepts requests."""
        return self._server.start()

    async def send(self, error: BaseException) -> None:
        url = self.url
        if url is None:
            raise BrowserNotifierError("notification endpoint not started")
        self.state.set_body(str(error))
        try:
            opened = await asyncio.to_thread(self._opener, url)
        except Exception as exc:  # noqa: BLE001
            raise BrowserNotifierError(f"could not open {url}: {exc}", cause=exc) from exc
        if not opened:
            raise BrowserNotifierError(f"no browser available to open {url}")
