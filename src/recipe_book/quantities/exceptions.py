"""Exceptions raised by the quantity engine."""

from typing import Optional


class QuantityError(Exception):
    """Base exception for quantities that cannot be built from user input."""
    pass


class IncompleteQuantityError(QuantityError):
    """Raised when a value is given without a unit, or a unit without a value."""
    pass


class InvalidNumberError(QuantityError):
    """Raised when a value cannot be read as a finite number."""
    pass


class NegativeQuantityError(QuantityError):
    """Raised when a quantity value is below zero."""
    pass


class UnknownUnitError(QuantityError):
    """Raised when a unit token is not in the registry."""

    def __init__(self, token: str, message: Optional[str] = None):
        self.token = token
        super().__init__(message or f"Unit '{token}' not in registry")


class CategoryMismatchError(QuantityError):
    """Raised when attempting to convert between incompatible unit categories."""
    pass


class ConversionDataError(Exception):
    """Raised when the unit table is malformed."""
    pass
