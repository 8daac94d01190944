"""Recipe service: maps incoming recipe bodies to storable records."""

import logging
from typing import Any, Dict, List, Optional, Union

from pydantic import ValidationError

from recipe_book.common.schemas import (
    IngredientRecord,
    QuantityInput,
    RecipeInput,
    RecipeRecord,
)
from recipe_book.quantities import Quantifiable, QuantityError, QuantityParser

logger = logging.getLogger(__name__)


def _format_location(loc) -> str:
    """Render a pydantic error location as ingredients[1].amount.quantity"""
    path = ""
    for part in loc:
        if isinstance(part, int):
            path += f"[{part}]"
        else:
            path += f".{part}" if path else str(part)
    return path or "body"


class RecipeValidationError(Exception):
    """Raised when a recipe body cannot be turned into a record."""

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(f"{field}: {message}")


class RecipeService:
    """Builds recipe records, rendering every quantity they carry."""

    def __init__(self, quantifiable: Quantifiable):
        """Initialize recipe service.

        Args:
            quantifiable: Quantity engine used for prep time and ingredient amounts
        """
        self.quantifiable = quantifiable

    def map_quantifiable(
        self,
        payload: Optional[Union[QuantityInput, Dict[str, Any]]],
        field: str = "quantity"
    ) -> Optional[Dict[str, Any]]:
        """Render a client quantity into its stored form.

        Args:
            payload: {"quantity": ..., "unit": ...} or None
            field: Field path reported on failure

        Returns:
            {"readable", "normalized", "unit"} or None when no quantity was given

        Raises:
            RecipeValidationError: If the quantity is invalid
        """
        if payload is None:
            return None
        if isinstance(payload, dict):
            try:
                payload = QuantityInput.model_validate(payload)
            except ValidationError as e:
                first = e.errors()[0]
                logger.warning(f"Rejected {field}: {first['msg']}")
                raise RecipeValidationError(
                    field, f"{_format_location(first['loc'])}: {first['msg']}"
                ) from e

        try:
            rendering = self.quantifiable.build(payload.quantity, payload.unit)
        except QuantityError as e:
            logger.warning(f"Rejected {field}: {e}")
            raise RecipeValidationError(field, str(e)) from e

        return rendering.as_record() if rendering is not None else None

    def extract_recipe(self, body: Dict[str, Any]) -> Dict[str, Any]:
        """Validate a recipe body and render its quantities.

        Unknown top-level fields are carried through untouched.

        Args:
            body: Recipe body as received from a client

        Returns:
            Plain dict ready for persistence

        Raises:
            RecipeValidationError: If the body or any quantity is invalid
        """
        try:
            recipe = RecipeInput.model_validate(body)
        except ValidationError as e:
            first = e.errors()[0]
            raise RecipeValidationError(_format_location(first["loc"]), first["msg"]) from e

        logger.debug(f"Mapping recipe '{recipe.title}' with {len(recipe.ingredients)} ingredients")

        ingredients = [
            IngredientRecord(
                name=ingredient.name,
                amount=self.map_quantifiable(ingredient.amount, f"ingredients[{index}].amount"),
            )
            for index, ingredient in enumerate(recipe.ingredients)
        ]
        record = RecipeRecord(
            title=recipe.title,
            about=recipe.about,
            category=recipe.category,
            prep_time=self.map_quantifiable(recipe.prep_time, "prepTime"),
            ingredients=ingredients,
            instructions=recipe.instructions,
        )

        result = dict(recipe.model_extra or {})
        result.update(record.model_dump(by_alias=True))
        return result

    def scale_ingredients(self, record: Dict[str, Any], factor: Union[int, float, str]) -> List[Dict[str, Any]]:
        """Scale the ingredient amounts of a stored recipe.

        Amounts stay in the unit the user entered; readable text and
        normalized values are rebuilt from the scaled base-unit value.
        Scaling starts from the stored normalized value, which already
        carries the significant-digit rounding, so an entered "12345 g"
        scales from 12340 g even at factor 1.

        Raises:
            QuantityError: If the factor is not a non-negative number or a
                stored unit is no longer registered
        """
        multiplier = QuantityParser.parse_number(factor)
        registry = self.quantifiable.registry
        normalizer = self.quantifiable.normalizer

        scaled = []
        for ingredient in record.get("ingredients", []):
            amount = ingredient.get("amount")
            if not amount:
                scaled.append(dict(ingredient))
                continue

            unit = registry.resolve(amount["unit"])
            base_unit = registry.get_base_unit(unit.category)
            entered = normalizer.convert(amount["normalized"] * multiplier, base_unit.token, unit.token)
            rendering = self.quantifiable.build(entered, unit.token)
            scaled.append({**ingredient, "amount": rendering.as_record()})

        return scaled
