"""Custom exception types for domain and API layers."""


class AppError(Exception):
    """Base app exception."""


class NotFoundError(AppError):
    """No row matches the requested id."""


class StorageError(AppError):
    """Storage failure; the message is safe to show to clients."""
