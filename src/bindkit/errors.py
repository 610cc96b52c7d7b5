"""Bindkit error hierarchy.

All bindkit-specific errors inherit from BindkitError for easy catching.
Each also derives from the builtin a caller would expect (KeyError for key
lookups, ValueError for bad arguments) so plain mapping/sequence code keeps
working.
"""


class BindkitError(Exception):
    """Base error for all bindkit operations."""


class ReentrancyError(BindkitError, RuntimeError):
    """A mutation was attempted while another one was still notifying."""

    def __init__(self, message: str = "Cannot modify the collection during a collection changed event.") -> None:
        super().__init__(message)


class ReadOnlyError(BindkitError, RuntimeError):
    """A mutation was attempted on a read-only container."""

    def __init__(self, message: str = "Collection is read only and cannot be modified.") -> None:
        super().__init__(message)


class DuplicateKeyError(BindkitError, KeyError):
    """add() was called with a key that is already present."""


class KeyNotFoundError(BindkitError, KeyError):
    """A key lookup found nothing."""


class InvalidArgumentError(BindkitError, ValueError):
    """A required argument was missing or malformed."""


class DisposedError(BindkitError, RuntimeError):
    """The object was used after dispose()."""
