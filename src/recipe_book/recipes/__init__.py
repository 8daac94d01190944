"""Recipe record building on top of the quantity engine."""

from .service import RecipeService, RecipeValidationError

__all__ = [
    'RecipeService',
    'RecipeValidationError',
]
