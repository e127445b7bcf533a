from .schemas import RecipeRequest, Preferences, RecipeResponse, NutritionInfo, HealthResponse, ErrorResponse

__all__ = [
    "RecipeRequest",
    "Preferences",
    "RecipeResponse",
    "NutritionInfo",
    "HealthResponse",
    "ErrorResponse",
]
