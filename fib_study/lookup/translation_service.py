"""
Translation service for converting English words to Vietnamese.

This module provides a translation service implementation using the Google
Cloud Translation API (v2).
"""

import logging
from typing import Optional

import requests
from google.api_core import exceptions as google_exceptions
from google.auth import default
from google.auth import exceptions as auth_exceptions
from google.auth.transport.requests import AuthorizedSession
from google.cloud import translate_v2 as translate
from requests.adapters import HTTPAdapter

from fib_study.config import Config
from fib_study.errors import TranslationServiceError
from fib_study.lookup.services import TranslationService
from fib_study.models import TranslationResult


class TimeoutHTTPAdapter(HTTPAdapter):
    """HTTP adapter that applies a default timeout to every request."""

    def __init__(self, timeout, *args, **kwargs):
        self.timeout = timeout
        super().__init__(*args, **kwargs)

    def send(self, request, **kwargs):
        kwargs['timeout'] = kwargs.get('timeout') or self.timeout
        return super().send(request, **kwargs)


class GoogleTranslationService(TranslationService):
    """
    Translation service using Google Cloud Translation API.

    Translates English to Vietnamese ('vi'). Requires valid credentials:
    set the GOOGLE_APPLICATION_CREDENTIALS environment variable to your
    service account key file. The client is created on first use.
    """

    def __init__(self, client: Optional[translate.Client] = None):
        """
        Initialize the translation service.

        Args:
            client: Optional pre-configured translate_v2 client
        """
        self.logger = logging.getLogger(__name__)
        self.source_language = Config.SOURCE_LANGUAGE
        self.target_language = Config.TARGET_LANGUAGE
        self._client = client

    def _get_client(self) -> translate.Client:
        """Get or create the authenticated translation client."""
        if self._client is None:
            try:
                credentials, _ = default()
            except auth_exceptions.DefaultCredentialsError as e:
                self.logger.error(f"Google credentials not configured: {e}")
                raise TranslationServiceError(
                    "Translation service is not configured",
                    details=str(e),
                    suggested_actions=[
                        "Set GOOGLE_APPLICATION_CREDENTIALS to your service account key file"
                    ]
                ) from e

            # AuthorizedSession binds the credentials to a requests.Session
            http_session = AuthorizedSession(credentials)
            adapter = TimeoutHTTPAdapter(timeout=Config.HTTP_TIMEOUT)
            http_session.mount('https://', adapter)
            http_session.mount('http://', adapter)

            self._client = translate.Client(_http=http_session)
            self.logger.info(
                f"Google Cloud Translation initialized ({self.source_language} -> "
                f"{self.target_language}) with {Config.HTTP_TIMEOUT}s timeout"
            )
        return self._client

    def translate(self, text: str) -> TranslationResult:
        """
        Translate English text to Vietnamese.

        Args:
            text: English word or phrase

        Returns:
            TranslationResult; text is empty if the API returned no translation

        Raises:
            TranslationServiceError: If the text is empty or the API call fails
        """
        if not text or not text.strip():
            raise TranslationServiceError("Text parameter is required")

        client = self._get_client()
        try:
            result = client.translate(
                text,
                target_language=self.target_language,
                source_language=self.source_language,
                format_='text'
            )
        except (google_exceptions.GoogleAPICallError, auth_exceptions.GoogleAuthError) as e:
            self.logger.error(f"Translation failed for '{text}': {e}")
            raise TranslationServiceError(
                "Failed to translate text",
                details=f"Translation API error: {e}"
            ) from e
        except requests.RequestException as e:
            self.logger.error(f"Translation request failed for '{text}': {e}")
            raise TranslationServiceError(
                "Failed to translate text",
                details=f"Network error: {e}",
                suggested_actions=["Check your network connection and try again"]
            ) from e

        return TranslationResult(source=text, text=(result or {}).get('translatedText') or "")
