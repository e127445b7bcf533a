"""Deterministic placeholder recipe used when no AI provider answers."""

from app.models.schemas import NutritionInfo, RecipeRequest, RecipeResponse


# Naive per-ingredient estimates
CALORIES_PER_INGREDIENT = 120
PROTEIN_GRAMS_PER_INGREDIENT = 3.5
FAT_GRAMS_PER_INGREDIENT = 5.0
CARBS_GRAMS_PER_INGREDIENT = 12.0


def generate_placeholder_recipe(request: RecipeRequest) -> RecipeResponse:
    """Build a simple recipe from the ingredients alone. No I/O, never fails."""
    ingredients = request.cleaned_ingredients
    count = len(ingredients)

    if ingredients:
        title = "Quick " + " & ".join(ingredients[:2]) + " Dish"
    else:
        title = "Quick Recipe"

    steps = [
        f"Prepare the following ingredients: {', '.join(ingredients)}.",
        "Combine ingredients in a pan and cook for 8-12 minutes, adjust seasoning to taste.",
        "Serve hot.",
    ]

    return RecipeResponse(
        title=title,
        ingredients=ingredients,
        steps=steps,
        nutrition=NutritionInfo(
            calories=CALORIES_PER_INGREDIENT * count,
            protein_grams=round(PROTEIN_GRAMS_PER_INGREDIENT * count, 1),
            fat_grams=round(FAT_GRAMS_PER_INGREDIENT * count, 1),
            carbs_grams=round(CARBS_GRAMS_PER_INGREDIENT * count, 1),
        ),
        image_url=None,
        servings=request.resolved_servings,
    )
