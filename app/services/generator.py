"""Recipe generation orchestrator: prompt -> provider call -> normalize -> fallback."""

from typing import Optional

import httpx
import sentry_sdk

from app.config import AISettings, Settings, get_settings
from app.logger import get_logger
from app.models.schemas import RecipeRequest, RecipeResponse
from app.services.credentials import CredentialResolver
from app.services.normalizer import ResponseNormalizer
from app.services.placeholder import generate_placeholder_recipe
from app.services.prompts import get_recipe_generation_prompt
from app.services.providers import OutboundRequest, select_adapter

logger = get_logger("generator")


class RecipeGenerator:
    """
    Generate a recipe with the configured LLM provider.

    Flow:
        no endpoint             -> placeholder
        request build/transport -> placeholder
        non-2xx status          -> placeholder
        2xx                     -> normalizer (degraded text result if it blows up)

    One attempt per request, no retries. Once the provider has answered,
    its text is kept even when it cannot be parsed.
    """

    def __init__(
        self,
        ai: AISettings,
        credentials_path: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.ai = ai
        self.credential_resolver = CredentialResolver(credentials_path, timeout=ai.timeout_seconds)
        self.normalizer = ResponseNormalizer()
        # Test hook: httpx.MockTransport stands in for the provider
        self.transport = transport

    @classmethod
    def from_settings(cls, settings: Settings) -> "RecipeGenerator":
        return cls(settings.ai, credentials_path=settings.google_application_credentials)

    async def generate(self, request: RecipeRequest) -> RecipeResponse:
        ai = self.ai
        logger.info(
            f"AI provider={ai.provider_name or 'none'}; endpointConfigured={ai.endpoint_configured}; "
            f"apiKeyPresent={ai.api_key_present}; model={ai.model or 'default'}"
        )

        if not ai.endpoint_configured:
            logger.warning("AI endpoint not configured. Falling back to local placeholder.")
            return self._fallback(request, "no_endpoint", report=False)

        prompt = get_recipe_generation_prompt(request)
        endpoint = ai.endpoint.strip()
        api_key = ai.api_key.strip() if ai.api_key_present else None

        try:
            adapter = select_adapter(ai.provider_name, endpoint, self.credential_resolver)
            outbound = await adapter.build_request(endpoint, api_key, prompt)
            logger.info(
                f"Sending {adapter.name} request to {outbound.redacted_url} "
                f"(authorized={outbound.has_authorization})"
            )
            response = await self._send(outbound)
        except httpx.HTTPError as e:
            logger.error(f"Error while calling AI endpoint: {type(e).__name__}: {e}", exc_info=True)
            return self._fallback(request, "transport_error", detail=str(e))
        except Exception as e:
            logger.exception("Unexpected error while calling AI endpoint")
            sentry_sdk.capture_exception(e)
            return self._fallback(request, "request_error", detail=str(e))

        if not response.is_success:
            logger.error(
                f"AI API returned {response.status_code}: {response.text[:500]}",
                extra={"provider": adapter.name, "status_code": response.status_code},
            )
            return self._fallback(request, "upstream_status", detail=f"HTTP {response.status_code}")

        try:
            return self.normalizer.normalize(response.text, request)
        except Exception as e:
            logger.exception("Failed to parse AI response. Returning raw output.")
            sentry_sdk.capture_exception(e)
            return self.normalizer.degraded(response.text, request)

    async def _send(self, outbound: OutboundRequest) -> httpx.Response:
        async with httpx.AsyncClient(timeout=self.ai.timeout_seconds, transport=self.transport) as client:
            return await client.post(outbound.url, headers=outbound.headers, json=outbound.body)

    def _fallback(
        self,
        request: RecipeRequest,
        reason: str,
        detail: str = "",
        report: bool = True,
    ) -> RecipeResponse:
        """Single exit for every path that ends without a usable provider response."""
        if not report:
            return generate_placeholder_recipe(request)

        logger.warning(f"Falling back to placeholder recipe ({reason})")
        sentry_sdk.capture_message(
            f"Recipe generation fell back to placeholder: {reason}",
            level="warning",
            extras={
                "provider": self.ai.provider_name,
                "detail": detail[:500],
            },
            tags={
                "feature": "recipe_generation",
                "error_type": reason,
            },
        )
        return generate_placeholder_recipe(request)


def get_recipe_generator() -> RecipeGenerator:
    """FastAPI dependency (overridden in tests)."""
    return RecipeGenerator.from_settings(get_settings())
