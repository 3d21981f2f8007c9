"""Exception types raised while building an inventory."""
from typing import Optional, Sequence


class InventoryError(RuntimeError):
    """Base class for inventory generation failures."""


class ConfigurationError(InventoryError):
    """Raised when inventory options cannot be used to build a provider."""


class FetchError(InventoryError):
    """Raised when a provider listing could not be obtained or parsed."""

    def __init__(
        self,
        message: str,
        command: Optional[Sequence[str]] = None,
        detail: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.command = list(command) if command else []
        self.detail = detail
