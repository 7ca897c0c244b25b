"""Application notifications – browser popup via a local HTTP endpoint."""
from alertcron.application.notifications.page import (
    PAGE_TITLE,
    SERVER_HEADER,
    PageSnapshot,
    PageState,
    create_app,
    render_page,
)
from alertcron.application.notifications.server import NotificationServer
from alertcron.application.notifications.browser import (
    BrowserNotification,
    BrowserNotifier,
    UrlOpener,
)

__all__ = [
    "PAGE_TITLE",
    "SERVER_HEADER",
    "BrowserNotification",
    "BrowserNotifier",
    "NotificationServer",
    "PageSnapshot",
    "PageState",
    "UrlOpener",
    "create_app",
    "render_page",
]
