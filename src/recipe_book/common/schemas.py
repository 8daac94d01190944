"""Pydantic schemas for recipe bodies and the records built from them"""
from typing import List, Optional, Union

from pydantic import BaseModel, Field, StrictFloat, StrictInt, StrictStr, field_validator


# Input Schemas

class QuantityInput(BaseModel):
    """Free-form quantity as supplied by a client"""
    quantity: Optional[Union[StrictInt, StrictFloat, StrictStr]] = None
    unit: Optional[str] = Field(None, max_length=64)


class IngredientInput(BaseModel):
    """Ingredient line of an incoming recipe"""
    name: str = Field(..., min_length=1, max_length=255)
    amount: Optional[QuantityInput] = None


class RecipeInput(BaseModel):
    """Incoming recipe body"""
    title: str = Field(..., min_length=1, max_length=255)
    about: Optional[str] = Field(None, max_length=5000)
    category: Optional[str] = Field(None, max_length=255)
    prep_time: Optional[QuantityInput] = Field(None, alias="prepTime")
    ingredients: List[IngredientInput] = Field(default_factory=list)
    instructions: List[str] = Field(default_factory=list)

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("title must not be blank")
        return v.strip()

    model_config = {"populate_by_name": True, "extra": "allow"}


# Record Schemas

class QuantityRecord(BaseModel):
    """Stored rendering of a quantity"""
    readable: str
    normalized: float = Field(..., ge=0.0)
    unit: str


class IngredientRecord(BaseModel):
    """Ingredient as stored with a recipe"""
    name: str
    amount: Optional[QuantityRecord] = None


class RecipeRecord(BaseModel):
    """Recipe ready to be handed to persistence"""
    title: str
    about: Optional[str] = None
    category: Optional[str] = None
    prep_time: Optional[QuantityRecord] = Field(None, alias="prepTime")
    ingredients: List[IngredientRecord] = Field(default_factory=list)
    instructions: List[str] = Field(default_factory=list)

    model_config = {"populate_by_name": True}
