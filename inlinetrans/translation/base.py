"""
Base translation backend interface.
All translation engines must inherit from TranslationBackend.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Dict, Optional, Any
from dataclasses import dataclass, field

import requests

from inlinetrans.core.exceptions import BackendError, ConfigurationError
from inlinetrans.core.models import OverlaySettings

logger = logging.getLogger(__name__)


@dataclass
class TranslationRequest:
    """Request for translation."""
    text: str
    source_lang: str = "auto"
    target_lang: str = "zh"


@dataclass
class TranslationResponse:
    """Response from translation backend."""
    translation: str
    backend: str
    model: str = ""
    latency: float = 0.0
    metadata: Dict[str, Any] = field(default_factory=dict)


class TranslationBackend(ABC):
    """Abstract base class for translation backends."""

    name = "base"

    def __init__(self, settings: OverlaySettings, http: Optional[Any] = None):
        """
        Args:
            settings: Settings snapshot the backend reads its endpoint from
            http: requests.Session-compatible object used for POST calls
        """
        self.settings = settings
        self.http = http if http is not None else requests.Session()

    @property
    def model(self) -> str:
        return self.settings.model

    @abstractmethod
    def validate(self) -> None:
        """Raise ConfigurationError if the settings cannot drive this backend."""

    @abstractmethod
    def translate_sync(self, request: TranslationRequest) -> TranslationResponse:
        """
        Translate text synchronously.

        Args:
            request: Translation request with text and languages

        Returns:
            TranslationResponse whose translation may be empty when the
            endpoint answered without a usable field
        """

    async def translate(self, request: TranslationRequest) -> TranslationResponse:
        """Translate asynchronously; the blocking HTTP call runs in a worker thread."""
        return await asyncio.to_thread(self.translate_sync, request)

    def _post(self, payload: Dict[str, Any], headers: Optional[Dict[str, str]] = None):
        """POST JSON to the configured endpoint, mapping transport failures to BackendError."""
        all_headers = {"Content-Type": "application/json"}
        if headers:
            all_headers.update(headers)
        try:
            return self.http.post(
                self.settings.api_url,
                json=payload,
                headers=all_headers,
                timeout=self.settings.timeout,
            )
        except requests.exceptions.RequestException as e:
            raise BackendError(self.name, f"request failed: {e}", original_error=e) from e

    def is_available(self) -> bool:
        """Check if backend is configured."""
        try:
            self.validate()
        except ConfigurationError:
            return False
        return True

    def get_info(self) -> Dict:
        """Get backend information."""
        return {
            "name": self.name,
            "model": self.model,
            "endpoint": self.settings.api_url,
            "available": self.is_available()
        }
