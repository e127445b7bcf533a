"""Recipe generation prompt shared by every LLM provider."""

from app.models.schemas import RecipeRequest


RECIPE_OUTPUT_SCHEMA = """{
  "Title": "Recipe Name",
  "Description": "One or two sentences about the dish",
  "Ingredients": ["2 eggs", "1 cup cooked rice"],
  "Steps": ["Step 1", "Step 2"],
  "Nutrition": {"Calories": 450, "ProteinGrams": 18.5, "FatGrams": 12.0, "CarbsGrams": 60.0},
  "ImageDescription": "What a photo of the finished dish would show",
  "Servings": 2
}"""


def _dietary_constraints(request: RecipeRequest) -> list[str]:
    """Active preferences only; inactive flags are left out entirely."""
    preferences = request.preferences
    if preferences is None:
        return []

    constraints = []
    if preferences.vegetarian:
        constraints.append("Vegetarian (no meat or fish)")
    if preferences.vegan:
        constraints.append("Vegan (no animal products)")
    if preferences.gluten_free:
        constraints.append("Gluten-free")
    if preferences.max_calories is not None:
        constraints.append(f"At most {preferences.max_calories} calories per serving")
    return constraints


def get_recipe_generation_prompt(request: RecipeRequest) -> str:
    """
    Generate the recipe generation prompt.

    Provider-agnostic: the same text goes into a Hugging Face `inputs`
    field or a Gemini `contents[].parts[].text`.
    """
    ingredient_lines = "\n".join(f"- {ingredient}" for ingredient in request.cleaned_ingredients)

    sections = [
        "You are a helpful chef assistant. Given the list of ingredients and optional "
        "dietary constraints, invent ONE recipe and return it as JSON exactly in the "
        f"following schema:\n{RECIPE_OUTPUT_SCHEMA}",
        f"Ingredients:\n{ingredient_lines}",
    ]

    constraints = _dietary_constraints(request)
    if constraints:
        constraint_lines = "\n".join(f"- {constraint}" for constraint in constraints)
        sections.append(f"Dietary constraints:\n{constraint_lines}")

    sections.append(f"Servings: {request.resolved_servings}")
    sections.append(
        "Create a realistic set of steps and a simple nutrition estimate for the whole recipe.\n"
        "Respond with JSON only, without markdown fences or additional explanation."
    )

    return "\n\n".join(sections)
