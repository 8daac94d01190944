"""Pytest configuration and shared fixtures"""
import json

import pytest

from recipe_book.common.config import DEFAULT_UNITS_PATH
from recipe_book.quantities import (
    FractionFormatter,
    Quantifiable,
    QuantityParser,
    UnitNormalizer,
    UnitRegistry,
)
from recipe_book.recipes import RecipeService


@pytest.fixture(scope="session")
def registry():
    """Registry built from the packaged unit table"""
    return UnitRegistry(DEFAULT_UNITS_PATH)


@pytest.fixture
def parser(registry):
    return QuantityParser(registry)


@pytest.fixture
def normalizer(registry):
    return UnitNormalizer(registry)


@pytest.fixture
def formatter():
    return FractionFormatter()


@pytest.fixture
def quantifiable(registry):
    return Quantifiable(registry)


@pytest.fixture
def recipe_service(quantifiable):
    return RecipeService(quantifiable)


@pytest.fixture
def write_units(tmp_path):
    """Write a unit table to a temporary file and return its path"""
    def _write(data):
        path = tmp_path / "units.json"
        path.write_text(json.dumps(data), encoding="utf-8")
        return path
    return _write


@pytest.fixture
def sample_recipe():
    """Recipe body as a client would send it"""
    return {
        "title": "Buttermilk Pancakes",
        "about": "Fluffy weekend pancakes.",
        "category": "breakfast",
        "prepTime": {"quantity": 20, "unit": "minutes"},
        "ingredients": [
            {"name": "flour", "amount": {"quantity": "1.5", "unit": "cups"}},
            {"name": "sugar", "amount": {"quantity": 2, "unit": "tbsp"}},
            {"name": "salt"},
            {"name": "eggs", "amount": {"quantity": 2, "unit": "whole"}},
        ],
        "instructions": ["Whisk the dry ingredients.", "Fold in the wet ingredients."],
        "servings": 4,
    }
