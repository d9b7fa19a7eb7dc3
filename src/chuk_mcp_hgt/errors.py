"""
Error hierarchy for HGT tile lookups.

Every failure on the path from coordinate to elevation is raised as a
subclass of HGTError so callers can catch the whole family at once.
"""


class HGTError(Exception):
    """Base error for elevation lookups."""


class NetworkError(HGTError):
    """Fetching the remote tile archive failed (transport, timeout, or HTTP status)."""

    def __init__(self, message: str, url: str, status_code: int | None = None) -> None:
        self.url = url
        self.status_code = status_code
        super().__init__(message)


class TileIOError(HGTError):
    """Local filesystem failure: create, open, seek, read, or rename."""


class DecodeError(HGTError):
    """The downloaded archive is not a valid gzip stream."""


class InvalidResolutionError(HGTError):
    """Tile byte size matches no known HGT grid layout.

    Attributes:
        size: The observed file size in bytes
    """

    def __init__(self, message: str, size: int) -> None:
        self.size = size
        super().__init__(message)
