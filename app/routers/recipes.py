"""Recipe generation endpoints."""

from fastapi import APIRouter, Body, Depends, HTTPException
from fastapi.responses import PlainTextResponse
from typing import Optional

from app.models.schemas import ErrorResponse, RecipeRequest, RecipeResponse
from app.services.generator import RecipeGenerator, get_recipe_generator

router = APIRouter(prefix="/api/recipes", tags=["recipes"])

MISSING_INGREDIENTS = "Please provide a list of ingredients."


@router.get("", response_class=PlainTextResponse)
async def describe_service():
    """Plain-text service banner."""
    return "Smart Recipe Generator API"


@router.post(
    "/generate",
    response_model=RecipeResponse,
    responses={400: {"model": ErrorResponse}},
)
async def generate_recipe(
    payload: Optional[RecipeRequest] = Body(None),
    generator: RecipeGenerator = Depends(get_recipe_generator),
):
    """
    Generate a recipe from a list of ingredients.

    Always answers 200 with a populated recipe once the ingredient list is
    present: provider failures fall back to a placeholder or to the raw
    provider text instead of surfacing as errors.
    """
    if payload is None or not payload.ingredients:
        raise HTTPException(status_code=400, detail=MISSING_INGREDIENTS)

    return await generator.generate(payload)


@router.get("/{recipe_id}", responses={404: {"model": ErrorResponse}})
async def get_recipe(recipe_id: str):
    """Recipes are not stored, so there is never anything to return."""
    raise HTTPException(status_code=404, detail="Recipe not found")
