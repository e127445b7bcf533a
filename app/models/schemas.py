"""Pydantic schemas for API request/response validation.

JSON goes out in camelCase (title, imageUrl, proteinGrams, ...). Incoming
bodies, including recipes returned by an LLM provider, are matched on field
names without regard to case: models answer with "Title" or "title" alike.
"""

import math

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel
from typing import Any, Optional


class CamelModel(BaseModel):
    """Base model: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CaseInsensitiveModel(CamelModel):
    """
    Model that folds incoming keys onto its fields case-insensitively.

    "ProteinGrams", "proteinGrams", "protein_grams" and "PROTEINGRAMS" all
    land on `protein_grams`. Unknown keys are ignored. A null value for a
    field that has a non-null default is dropped so the default applies.
    """

    @model_validator(mode="before")
    @classmethod
    def fold_keys(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data

        lookup = {}
        for name in cls.model_fields:
            lookup[name.replace("_", "").lower()] = name

        folded = {}
        for key, value in data.items():
            if not isinstance(key, str):
                continue
            name = lookup.get(key.replace("_", "").lower())
            if name is None:
                continue
            if value is None and cls.model_fields[name].default is not None:
                continue
            folded[name] = value
        return folded


# ============================================================
# Request
# ============================================================

class Preferences(CaseInsensitiveModel):
    """Optional dietary preferences."""
    vegetarian: bool = False
    vegan: bool = False
    gluten_free: bool = False
    max_calories: Optional[int] = None

    @property
    def has_constraints(self) -> bool:
        return self.vegetarian or self.vegan or self.gluten_free or self.max_calories is not None


class RecipeRequest(CaseInsensitiveModel):
    """Ingredients to cook with, plus optional preferences."""
    ingredients: list[str] = Field(default_factory=list)
    preferences: Optional[Preferences] = None
    servings: int = 1

    @property
    def resolved_servings(self) -> int:
        """Servings, with anything below one treated as one."""
        return self.servings if self.servings > 0 else 1

    @property
    def cleaned_ingredients(self) -> list[str]:
        """Ingredients trimmed, blanks dropped, order kept."""
        return [i.strip() for i in self.ingredients if i and i.strip()]


# ============================================================
# Response
# ============================================================

class NutritionInfo(CaseInsensitiveModel):
    """Rough nutrition estimate for the whole recipe."""

    model_config = ConfigDict(allow_inf_nan=False)

    calories: int = 0
    protein_grams: float = 0.0
    fat_grams: float = 0.0
    carbs_grams: float = 0.0

    @field_validator("calories", mode="before")
    @classmethod
    def round_calories(cls, value: Any) -> Any:
        # LLMs sometimes return floats like 187.5
        if isinstance(value, float) and math.isfinite(value):
            return int(round(value))
        return value


class RecipeResponse(CaseInsensitiveModel):
    """A generated recipe."""
    title: str = ""
    description: Optional[str] = None
    ingredients: list[str] = Field(default_factory=list)
    steps: list[str] = Field(default_factory=list)
    nutrition: Optional[NutritionInfo] = None
    image_url: Optional[str] = None
    image_description: Optional[str] = None
    servings: int = 1


# ============================================================
# Utility Schemas
# ============================================================

class HealthResponse(BaseModel):
    """Health check response."""
    status: str = "healthy"
    environment: str
    provider: str
    endpoint_configured: bool


class ErrorResponse(BaseModel):
    """Standard error response."""
    detail: str
