"""Exception taxonomy for the content registry.

Each error also derives from the closest builtin so callers that only care
about the broad category (``KeyError`` for a missing item, ``ValueError`` for
bad input) can catch that instead.
"""


class RegistryError(Exception):
    """Base class for all registry errors."""


class InvalidArgumentError(RegistryError, ValueError):
    """Caller supplied a missing, blank or otherwise unusable argument."""


class InvalidContentError(InvalidArgumentError):
    """Raw content is missing or does not match its declared format."""


class ItemAlreadyExistsError(RegistryError):
    """An item with the same name is already registered."""


class ItemNotFoundError(RegistryError, KeyError):
    """No item is registered under the requested name."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message instead.
        return str(self.args[0]) if self.args else ""


class NotInitializedError(RegistryError, RuntimeError):
    """The registry was used before ``initialize()`` was called."""


class AlreadyInitializedError(RegistryError, RuntimeError):
    """``initialize()`` was called more than once."""


class UnsupportedContentTypeError(RegistryError, NotImplementedError):
    """A content type tag outside the known set was encountered."""


class RegistrationFailedError(RegistryError, RuntimeError):
    """The storage backend refused to add an item."""
