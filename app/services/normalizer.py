"""Turn raw provider output into a RecipeResponse.

LLM backends answer in many shapes: the recipe JSON itself, the recipe
wrapped in a provider envelope (Gemini `candidates`, Hugging Face
`generated_text`), prose with a JSON object somewhere inside it, or plain
prose. Extraction runs as an ordered list of attempts and the first one that
yields a recipe wins. If none does, the text is wrapped as a single step so
the caller still gets something useful.
"""

import json
from dataclasses import dataclass
from typing import Any, Callable, Optional

from pydantic import ValidationError

from app.logger import get_logger
from app.models.schemas import RecipeRequest, RecipeResponse

logger = get_logger("normalizer")

FALLBACK_TITLE = "AI generated result"


@dataclass
class Extraction:
    """Outcome of one attempt: a recipe, replacement text, or neither."""
    recipe: Optional[RecipeResponse] = None
    text: Optional[str] = None


NO_MATCH = Extraction()


def _load_json(text: str) -> Optional[Any]:
    try:
        return json.loads(text)
    except (json.JSONDecodeError, TypeError):
        return None


def parse_recipe(text: str) -> Optional[RecipeResponse]:
    """Case-insensitive structural parse of a JSON object into a RecipeResponse."""
    data = _load_json(text)
    if not isinstance(data, dict):
        return None
    try:
        return RecipeResponse.model_validate(data)
    except ValidationError:
        return None


def _string(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


def _candidate_text(candidate: Any) -> Optional[str]:
    """First candidate of a Gemini/PaLM style response."""
    if not isinstance(candidate, dict):
        return None

    output = _string(candidate.get("output"))
    if output is not None:
        return output

    content = candidate.get("content")
    if isinstance(content, dict) and isinstance(content.get("parts"), list):
        pieces = []
        for part in content["parts"]:
            if isinstance(part, dict) and isinstance(part.get("text"), str):
                pieces.append(part["text"])
            elif isinstance(part, str):
                pieces.append(part)
        if pieces:
            return "".join(pieces)

    return _string(candidate.get("text"))


def unwrap_envelope(text: str) -> Optional[str]:
    """Pull the generated text out of a known provider envelope, if any."""
    data = _load_json(text)

    # Hugging Face Inference API: [{"generated_text": "..."}]
    if isinstance(data, list) and data and isinstance(data[0], dict):
        return _string(data[0].get("generated_text"))

    if not isinstance(data, dict):
        return None

    candidates = data.get("candidates")
    if isinstance(candidates, list) and candidates:
        return _candidate_text(candidates[0])

    generated = _string(data.get("generated_text"))
    if generated is not None:
        return generated

    return _string(data.get("output"))


def match_schema(text: str) -> Extraction:
    """The body is the recipe itself. An empty title means it is some other JSON."""
    recipe = parse_recipe(text)
    if recipe is not None and recipe.title.strip():
        return Extraction(recipe=recipe)
    return NO_MATCH


def match_envelope(text: str) -> Extraction:
    unwrapped = unwrap_envelope(text)
    if unwrapped is None:
        return NO_MATCH
    return Extraction(text=unwrapped)


def match_embedded_json(text: str) -> Extraction:
    """Outermost {...} span inside prose or markdown fences."""
    start = text.find("{")
    end = text.rfind("}")
    if start < 0 or end <= start:
        return NO_MATCH

    recipe = parse_recipe(text[start:end + 1])
    if recipe is None:
        return NO_MATCH
    return Extraction(recipe=recipe)


class ResponseNormalizer:
    """
    Run the extraction attempts in order and guarantee a valid recipe.

    Attempts:
        1. match_schema        - body deserializes with a non-empty title
        2. match_envelope      - replace working text with the envelope content
        3. match_embedded_json - first `{` to last `}` of the working text
    then the degraded result (working text as the only step).
    """

    EXTRACTORS: tuple[Callable[[str], Extraction], ...] = (
        match_schema,
        match_envelope,
        match_embedded_json,
    )

    def normalize(self, body: str, request: RecipeRequest) -> RecipeResponse:
        text = body
        for extract in self.EXTRACTORS:
            outcome = extract(text)
            if outcome.recipe is not None:
                logger.info(f"Parsed recipe via {extract.__name__}: {outcome.recipe.title or 'Untitled'}")
                return self._finalize(outcome.recipe, request)
            if outcome.text is not None:
                logger.info(f"Unwrapped provider envelope via {extract.__name__}")
                text = outcome.text

        logger.error("Could not parse a recipe from the provider response; returning raw output")
        return self.degraded(text, request)

    def degraded(self, text: str, request: RecipeRequest) -> RecipeResponse:
        """Wrap unparseable provider output as a single step."""
        return RecipeResponse(
            title=FALLBACK_TITLE,
            ingredients=list(request.ingredients),
            steps=[text],
            servings=request.resolved_servings,
        )

    def _finalize(self, recipe: RecipeResponse, request: RecipeRequest) -> RecipeResponse:
        """Fill the gaps a parsed recipe may leave. A complete recipe is returned as-is."""
        updates = {}

        if not recipe.title.strip():
            updates["title"] = FALLBACK_TITLE
        if not recipe.ingredients:
            updates["ingredients"] = list(request.ingredients)
        if recipe.servings <= 0:
            updates["servings"] = request.resolved_servings

        nutrition = recipe.nutrition
        if nutrition is not None:
            grams = {
                name: 0.0
                for name in ("protein_grams", "fat_grams", "carbs_grams")
                if getattr(nutrition, name) < 0
            }
            if grams:
                updates["nutrition"] = nutrition.model_copy(update=grams)

        if not updates:
            return recipe
        return recipe.model_copy(update=updates)
