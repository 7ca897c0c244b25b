"""Notifier errors – raised by the notification channels themselves."""

from __future__ import annotations

from alertcron.kernel.errors.base import BaseError


class BrowserNotifierError(BaseError):
    """The presentation endpoint could not start or the URL could not be opened."""

    default_code = "browser_notifier_error"


__all__ = ["BrowserNotifierError"]
