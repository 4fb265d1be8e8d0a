"""Domain errors raised by the storage layer and services."""

from fastapi import status


class GroceryListError(Exception):
    """Base error; the API renders it as ``{"detail": message}``."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(GroceryListError):
    """Bad input: empty names, unknown categories, invalid reorder lists."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(GroceryListError):
    """Unknown id on update or delete."""

    status_code = status.HTTP_404_NOT_FOUND


class DatabaseConnectionError(GroceryListError):
    """The database could not be opened or migrated."""
