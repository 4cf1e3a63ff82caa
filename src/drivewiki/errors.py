"""Errors raised by the remote file store."""


class StoreError(RuntimeError):
    """A store request failed."""


class NotFoundError(StoreError):
    """The requested file no longer exists."""


class PermissionDeniedError(StoreError):
    """Access to the requested file was denied."""
