"""Unit tests for the HTTP surface."""

from unittest.mock import AsyncMock

import httpx
import pytest
from fastapi.testclient import TestClient

from app.config import AISettings
from app.main import app
from app.services.generator import RecipeGenerator, get_recipe_generator


@pytest.fixture
def client():
    yield TestClient(app)
    app.dependency_overrides.clear()


def use_generator(generator) -> None:
    app.dependency_overrides[get_recipe_generator] = lambda: generator


class TestServiceEndpoints:
    """Tests for the informational endpoints."""

    def test_banner(self, client) -> None:
        response = client.get("/api/recipes")

        assert response.status_code == 200
        assert response.text == "Smart Recipe Generator API"
        assert response.headers["content-type"].startswith("text/plain")

    @pytest.mark.parametrize("recipe_id", ["1", "42", "abc"])
    def test_get_by_id_always_404(self, client, recipe_id) -> None:
        assert client.get(f"/api/recipes/{recipe_id}").status_code == 404

    def test_health_has_no_secrets(self, client, monkeypatch) -> None:
        monkeypatch.setenv("AI__PROVIDER", "gemini")
        monkeypatch.setenv("AI__ENDPOINT", "https://generativelanguage.googleapis.com/v1beta/x")
        monkeypatch.setenv("AI__API_KEY", "AIzaSECRET")

        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["provider"] == "gemini"
        assert response.json()["endpoint_configured"] is True
        assert "AIzaSECRET" not in response.text

    def test_root(self, client) -> None:
        assert client.get("/").json()["docs"] == "/docs"


class TestGenerateValidation:
    """Tests for the upfront 400."""

    @pytest.mark.parametrize(
        "payload",
        [
            {"ingredients": []},
            {"servings": 2},
            {"ingredients": None},
            {"ingredients": "egg"},
        ],
    )
    def test_missing_or_empty_ingredients(self, client, payload) -> None:
        generator = AsyncMock(spec=RecipeGenerator)
        use_generator(generator)

        response = client.post("/api/recipes/generate", json=payload)

        assert response.status_code == 400
        assert response.json()["detail"] == "Please provide a list of ingredients."
        generator.generate.assert_not_called()

    def test_no_body(self, client) -> None:
        generator = AsyncMock(spec=RecipeGenerator)
        use_generator(generator)

        response = client.post("/api/recipes/generate")

        assert response.status_code == 400
        generator.generate.assert_not_called()


class TestGenerate:
    """Tests for successful generation through the API."""

    def test_placeholder_without_endpoint(self, client) -> None:
        response = client.post("/api/recipes/generate", json={"ingredients": ["egg", "rice"]})

        assert response.status_code == 200
        body = response.json()
        assert body["title"] == "Quick egg & rice Dish"
        assert body["ingredients"] == ["egg", "rice"]
        assert body["servings"] == 1
        assert body["nutrition"] == {
            "calories": 240,
            "proteinGrams": 7.0,
            "fatGrams": 10.0,
            "carbsGrams": 24.0,
        }

    def test_pascal_case_request_accepted(self, client) -> None:
        response = client.post(
            "/api/recipes/generate",
            json={"Ingredients": ["egg"], "Servings": -2, "Preferences": {"GlutenFree": True}},
        )

        assert response.status_code == 200
        assert response.json()["servings"] == 1

    def test_upstream_failure_is_still_200(self, client) -> None:
        generator = RecipeGenerator(
            AISettings(provider="huggingface", endpoint="https://api-inference.huggingface.co/models/m"),
            transport=httpx.MockTransport(lambda r: httpx.Response(500, text="oops")),
        )
        use_generator(generator)

        response = client.post("/api/recipes/generate", json={"ingredients": ["egg", "rice"]})

        assert response.status_code == 200
        assert response.json()["title"] == "Quick egg & rice Dish"

    def test_ai_recipe_serialized_camel_case(self, client) -> None:
        recipe = {
            "Title": "Tamago Kake Gohan",
            "Ingredients": ["egg", "rice"],
            "Steps": ["Crack egg over hot rice."],
            "ImageDescription": "A bowl of rice topped with a raw egg",
            "Servings": 1,
        }
        generator = RecipeGenerator(
            AISettings(endpoint="https://llm.internal/generate"),
            transport=httpx.MockTransport(lambda r: httpx.Response(200, json=recipe)),
        )
        use_generator(generator)

        body = client.post("/api/recipes/generate", json={"ingredients": ["egg", "rice"]}).json()

        assert body["title"] == "Tamago Kake Gohan"
        assert body["imageDescription"] == "A bowl of rice topped with a raw egg"
