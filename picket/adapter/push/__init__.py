"""Web Push adapter."""

from .client import MockPushSender, WebPushSender

__all__ = ["MockPushSender", "WebPushSender"]
