"""Per-provider request construction for the recipe LLM call.

Each provider wants a different body shape and auth mechanism:

- huggingface: {"inputs": prompt}, static key as bearer token
- gemini/google: {"contents": [{"parts": [{"text": prompt}]}]}, static key
  as `?key=` query parameter, else a service-account bearer token
- anything else: {"inputs": prompt}, static key as bearer token
"""

from dataclasses import dataclass, field
from typing import Optional

import httpx

from app.logger import get_logger
from app.services.credentials import CredentialResolver

logger = get_logger("providers")

GOOGLE_GENERATIVE_LANGUAGE_HOST = "generativelanguage.googleapis.com"


@dataclass
class OutboundRequest:
    """A fully-formed provider request, ready to POST."""
    url: httpx.URL
    body: dict
    headers: dict[str, str] = field(default_factory=dict)

    @property
    def redacted_url(self) -> str:
        """URL safe for logs (no `key` query parameter)."""
        return str(self.url.copy_remove_param("key"))

    @property
    def has_authorization(self) -> bool:
        return "Authorization" in self.headers or "key" in self.url.params


class ProviderAdapter:
    """Base strategy: turn a prompt into an `OutboundRequest`."""

    name = "generic"

    async def build_request(self, endpoint: str, api_key: Optional[str], prompt: str) -> OutboundRequest:
        raise NotImplementedError

    @staticmethod
    def _bearer(token: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {token}"}


class BearerAdapter(ProviderAdapter):
    """Generic inference endpoint: `{"inputs": prompt}` plus optional bearer key."""

    name = "generic"

    async def build_request(self, endpoint: str, api_key: Optional[str], prompt: str) -> OutboundRequest:
        headers = self._bearer(api_key) if api_key else {}
        return OutboundRequest(url=httpx.URL(endpoint), body={"inputs": prompt}, headers=headers)


class HuggingFaceAdapter(BearerAdapter):
    """Hugging Face Inference API (same shape as the generic adapter)."""

    name = "huggingface"


class GeminiAdapter(ProviderAdapter):
    """Google Generative Language API (Gemini)."""

    name = "gemini"

    def __init__(self, credential_resolver: Optional[CredentialResolver] = None):
        self.credential_resolver = credential_resolver

    async def build_request(self, endpoint: str, api_key: Optional[str], prompt: str) -> OutboundRequest:
        url = httpx.URL(endpoint)
        headers = {}

        if api_key:
            # Keeps any existing query string (e.g. ?alt=json) intact
            url = url.copy_add_param("key", api_key)
        else:
            token = None
            if self.credential_resolver is not None:
                token = await self.credential_resolver.get_access_token()
            if token:
                headers = self._bearer(token)
            else:
                logger.warning("No API key or service account token for Gemini; call may fail")

        body = {"contents": [{"parts": [{"text": prompt}]}]}
        return OutboundRequest(url=url, body=body, headers=headers)


def is_google_endpoint(endpoint: str) -> bool:
    try:
        host = httpx.URL(endpoint).host
    except httpx.InvalidURL:
        return False
    return host == GOOGLE_GENERATIVE_LANGUAGE_HOST or host.endswith("." + GOOGLE_GENERATIVE_LANGUAGE_HOST)


def select_adapter(
    provider: str,
    endpoint: str,
    credential_resolver: Optional[CredentialResolver] = None,
) -> ProviderAdapter:
    """
    Pick the request strategy for a provider.

    The Google endpoint host selects Gemini even when the provider name is
    empty or something else. Unknown names get the generic bearer adapter.
    """
    adapters = {
        "huggingface": HuggingFaceAdapter,
        "gemini": lambda: GeminiAdapter(credential_resolver),
        "google": lambda: GeminiAdapter(credential_resolver),
    }

    name = (provider or "").strip().lower()
    if name not in adapters and is_google_endpoint(endpoint):
        name = "gemini"

    factory = adapters.get(name, BearerAdapter)
    return factory()
