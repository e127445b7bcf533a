"""Service-account token exchange for the Gemini (Google) provider."""

import asyncio
from pathlib import Path
from typing import Optional

import google.auth.transport.requests
import requests
from google.oauth2 import service_account

from app.logger import get_logger

logger = get_logger("credentials")

GENERATIVE_LANGUAGE_SCOPE = "https://www.googleapis.com/auth/generative-language.retriever"


class TimeoutSession(requests.Session):
    """Session that caps every request at a fixed timeout.

    google-auth passes its own longer timeout to the session, so it is
    replaced here rather than defaulted.
    """

    def __init__(self, timeout: float):
        super().__init__()
        self.timeout = timeout

    def request(self, method, url, **kwargs):
        kwargs["timeout"] = self.timeout
        return super().request(method, url, **kwargs)


class CredentialResolver:
    """
    Resolve a short-lived bearer token from a service-account JSON file.

    Every failure (no path, missing file, malformed JSON, token endpoint
    error, timeout) is logged at warning level and reported as `None`, so
    the caller carries on without a token.
    """

    def __init__(self, credentials_path: Optional[str], timeout: float = 30.0):
        self.credentials_path = credentials_path
        self.timeout = timeout

    async def get_access_token(self) -> Optional[str]:
        if not self.credentials_path or not Path(self.credentials_path).is_file():
            logger.warning("No service account file found (GOOGLE_APPLICATION_CREDENTIALS)")
            return None

        try:
            # google-auth refreshes synchronously
            token = await asyncio.wait_for(
                asyncio.to_thread(self._fetch_token),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError:
            logger.warning(f"Service account token exchange timed out after {self.timeout}s")
            return None
        except Exception as e:
            logger.warning(f"Failed to acquire access token from service account: {type(e).__name__}: {e}")
            return None

        if not token:
            logger.warning("Service account token exchange returned an empty token")
            return None

        logger.info("Acquired service account access token")
        return token

    def _fetch_token(self) -> Optional[str]:
        credentials = service_account.Credentials.from_service_account_file(
            self.credentials_path,
            scopes=[GENERATIVE_LANGUAGE_SCOPE],
        )
        with TimeoutSession(self.timeout) as session:
            credentials.refresh(google.auth.transport.requests.Request(session=session))
        return credentials.token
