"""OpenAI-compatible chat completion backend."""

import logging
import time
from typing import Any, Dict, List

from inlinetrans.core.exceptions import BackendError, ConfigurationError
from inlinetrans.core.models import DEFAULT_FROM_LANG, DEFAULT_TO_LANG
from ..base import TranslationBackend, TranslationRequest, TranslationResponse
from ..prompts import build_messages

logger = logging.getLogger(__name__)


class ChatCompletionBackend(TranslationBackend):
    """Chat-completion backend driven by templated prompts."""

    name = "openai"

    TEMPERATURE = 0.2

    def validate(self) -> None:
        settings = self.settings
        if not settings.api_url:
            raise ConfigurationError("Configure the OpenAI-compatible API URL.", config_key="api_url")
        if not settings.api_key:
            raise ConfigurationError("Configure the API key.", config_key="api_key")
        if not settings.model:
            raise ConfigurationError("Configure the model name.", config_key="model")
        if not settings.user_prompt or not settings.user_prompt.strip():
            raise ConfigurationError("The user prompt must not be empty.", config_key="user_prompt")

    def _build_messages(self, request: TranslationRequest) -> List[Dict[str, str]]:
        """Build messages for the chat API."""
        return build_messages(
            request.text,
            request.source_lang or DEFAULT_FROM_LANG,
            request.target_lang or DEFAULT_TO_LANG,
            user_prompt=self.settings.user_prompt,
            system_prompt=self.settings.system_prompt,
        )

    def build_payload(self, request: TranslationRequest) -> Dict[str, Any]:
        return {
            "model": self.model,
            "messages": self._build_messages(request),
            "temperature": self.TEMPERATURE,
            "stream": False,
        }

    def translate_sync(self, request: TranslationRequest) -> TranslationResponse:
        """Translate synchronously."""
        self.validate()
        start_time = time.time()
        payload = self.build_payload(request)

        logger.debug(f"Chat completion call: model={self.model}, messages={len(payload['messages'])}")
        resp = self._post(payload, headers={"Authorization": f"Bearer {self.settings.api_key}"})

        if not 200 <= resp.status_code < 300:
            raise BackendError(
                self.name,
                f"API error {resp.status_code}: {resp.text}",
                status_code=resp.status_code,
                response_body=resp.text
            )

        try:
            data = resp.json()
        except ValueError as e:
            logger.error(f"Unparseable chat completion response: {resp.text[:200]}")
            raise BackendError(
                self.name,
                "could not parse the OpenAI-compatible response",
                original_error=e,
                status_code=resp.status_code,
                response_body=resp.text
            ) from e

        content = self._extract_content(data)
        if not isinstance(content, str):
            raise BackendError(
                self.name,
                f"response has no string content in choices[0].message.content: {data!r}",
                status_code=resp.status_code,
                response_body=data
            )

        usage = data.get("usage") if isinstance(data, dict) else None
        return TranslationResponse(
            translation=content.strip(),
            backend=self.name,
            model=self.model,
            latency=time.time() - start_time,
            metadata={
                "finish_reason": self._first_choice(data).get("finish_reason"),
                "usage": usage or {},
            },
        )

    @staticmethod
    def _first_choice(data: Any) -> Dict[str, Any]:
        if not isinstance(data, dict):
            return {}
        choices = data.get("choices")
        if not isinstance(choices, list) or not choices or not isinstance(choices[0], dict):
            return {}
        return choices[0]

    def _extract_content(self, data: Any) -> Any:
        message = self._first_choice(data).get("message")
        if not isinstance(message, dict):
            return None
        return message.get("content")
