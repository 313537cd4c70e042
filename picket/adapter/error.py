"""Adapter layer errors."""


class AdapterError(Exception):
    """Base adapter error."""

    pass


class UpstreamError(AdapterError):
    """An external delivery service (mail, push) failed."""

    pass


class StaleSubscriptionError(UpstreamError):
    """The push service reports the endpoint no longer exists."""

    def __init__(self, endpoint: str, status_code: int | None = None):
        self.endpoint = endpoint
        self.status_code = status_code
        super().__init__(f"Push endpoint is gone (status {status_code})")
