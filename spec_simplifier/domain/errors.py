from __future__ import annotations

from typing import Optional


class SimplifierError(Exception):
    """Base class for everything this package raises on purpose."""


class ConfigError(SimplifierError):
    pass


class LocalIOError(SimplifierError):
    """Reading or writing a file failed. Never retried."""

    def __init__(self, path, cause: Optional[BaseException] = None):
        self.path = path
        self.cause = cause
        detail = f": {cause}" if cause else ""
        super().__init__(f"I/O error on {path}{detail}")


class ReviewError(SimplifierError):
    """A review call failed in a way another attempt may fix."""


class TransportError(ReviewError):
    """The request never produced a response (network, HTTP status, auth)."""


class MalformedResponseError(ReviewError):
    """A response arrived but is not the expected JSON shape."""

    def __init__(self, message: str, raw: str = ""):
        self.raw = raw
        super().__init__(message)


class ExhaustedRetriesError(SimplifierError):
    def __init__(self, attempts: int, last_error: Optional[BaseException] = None):
        self.attempts = attempts
        self.last_error = last_error
        msg = f"Failed to receive a usable response after {attempts} attempts"
        if last_error is not None:
            msg += f": {last_error}"
        super().__init__(msg)
