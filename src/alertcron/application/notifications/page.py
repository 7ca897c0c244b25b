"""Application notifications – page state and the FastAPI app serving it.

Each :class:`BrowserNotifier` owns one :class:`PageState`; the app reads it
per request, so several notifiers can live in one process.
"""
from __future__ import annotations

import dataclasses
import functools
import threading

import jinja2
from fastapi import FastAPI
from fastapi.responses import HTMLResponse

__all__ = ["PAGE_TITLE", "SERVER_HEADER", "PageSnapshot", "PageState", "create_app", "render_page"]

SERVER_HEADER = "alertcron-notifier"
PAGE_TITLE = "alertcron notification"


@functools.lru_cache(maxsize=1)
def _environment() -> jinja2.Environment:
    return jinja2.Environment(
        loader=jinja2.PackageLoader("alertcron.application.notifications", "templates"),
        autoescape=jinja2.select_autoescape(["html", "j2"]),
    )


@dataclasses.dataclass(frozen=True)
class PageSnapshot:
    noti: str
    body: str
    window_timeout_ms: int
    noti_timeout_ms: int


class PageState:
    """Mutable page content, written by the notifier, read by the server thread."""

    def __init__(self, noti: str, timeout_seconds: float | None = None) -> None:
        self._lock = threading.Lock()
        self._noti = noti
        self._body = ""
        # the tab outlives the OS notification by 3s
        if timeout_seconds:
            self._noti_timeout_ms = int(timeout_seconds * 1000)
            self._window_timeout_ms = int((timeout_seconds + 3) * 1000)
        else:
            self._noti_timeout_ms = 0
            self._window_timeout_ms = 0

    def set_body(self, body: str) -> None:
        with self._lock:
            self._body = body

    def snapshot(self) -> PageSnapshot:
        with self._lock:
            return PageSnapshot(
                noti=self._noti,
                body=self._body,
                window_timeout_ms=self._window_timeout_ms,
                noti_timeout_ms=self._noti_timeout_ms,
            )


def render_page(snapshot: PageSnapshot) -> str:
    template = _environment().get_template("notification.html.j2")
    return template.render(title=PAGE_TITLE, **dataclasses.asdict(snapshot))


def create_app(state: PageState) -> FastAPI:
    """Return an app serving *state* on ``/``; every other path is a 404."""
    app = FastAPI(docs_url=None, redoc_url=None, openapi_url=None)

    @app.get("/", response_class=HTMLResponse)
    async def page() -> HTMLResponse:
        return HTMLResponse(render_page(state.snapshot()), headers={"Server": SERVER_HEADER})

    return app
