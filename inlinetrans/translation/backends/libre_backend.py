"""LibreTranslate-compatible backend (simple text request/response protocol)."""

import logging
import time

from inlinetrans.core.exceptions import BackendError, ConfigurationError
from inlinetrans.core.models import DEFAULT_FROM_LANG, DEFAULT_TO_LANG
from ..base import TranslationBackend, TranslationRequest, TranslationResponse

logger = logging.getLogger(__name__)


class LibreTranslateBackend(TranslationBackend):
    """LibreTranslate HTTP backend."""

    name = "simple"

    def validate(self) -> None:
        if not self.settings.api_url:
            raise ConfigurationError(
                "Configure the translation API URL first.",
                config_key="api_url"
            )

    def translate_sync(self, request: TranslationRequest) -> TranslationResponse:
        self.validate()
        start = time.time()
        payload = {
            "q": request.text,
            "source": request.source_lang or DEFAULT_FROM_LANG,
            "target": request.target_lang or DEFAULT_TO_LANG,
            "format": "text",
        }
        if self.settings.api_key:
            payload["api_key"] = self.settings.api_key

        logger.debug(f"POST {self.settings.api_url} ({len(request.text)} chars, {payload['source']}->{payload['target']})")
        resp = self._post(payload)

        if not 200 <= resp.status_code < 300:
            raise BackendError(
                self.name,
                f"translation API returned status {resp.status_code}",
                status_code=resp.status_code,
                response_body=resp.text
            )

        try:
            data = resp.json()
        except ValueError as e:
            logger.error(f"Unparseable response from {self.settings.api_url}: {resp.text[:200]}")
            raise BackendError(
                self.name,
                "could not parse the translation API response",
                original_error=e,
                status_code=resp.status_code,
                response_body=resp.text
            ) from e

        return TranslationResponse(
            translation=self._extract_translation(data),
            backend=self.name,
            model=self.model,
            latency=time.time() - start,
            metadata={"endpoint": self.settings.api_url},
        )

    @staticmethod
    def _extract_translation(data) -> str:
        """Read translatedText from an object or from the first list element."""
        if isinstance(data, dict) and isinstance(data.get("translatedText"), str):
            return data["translatedText"]
        if isinstance(data, list) and data and isinstance(data[0], dict):
            translated = data[0].get("translatedText")
            if isinstance(translated, str):
                return translated
        # Missing field: the session reports an empty result
        return ""
