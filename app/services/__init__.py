"""Services module for recipe generation."""

from .generator import RecipeGenerator, get_recipe_generator
from .normalizer import ResponseNormalizer
from .placeholder import generate_placeholder_recipe
from .prompts import get_recipe_generation_prompt
from .credentials import CredentialResolver

__all__ = [
    "RecipeGenerator",
    "get_recipe_generator",
    "ResponseNormalizer",
    "generate_placeholder_recipe",
    "get_recipe_generation_prompt",
    "CredentialResolver",
]
