"""netctl exception hierarchy."""


class NetCtlError(Exception):
    """Base exception for all netctl errors."""


class StorageError(NetCtlError):
    """Raised when the local database fails or returns unusable data."""


class NotFoundError(NetCtlError):
    """Raised when a requested session does not exist."""


class InvalidInputError(NetCtlError):
    """Raised when a command is missing a required value."""
