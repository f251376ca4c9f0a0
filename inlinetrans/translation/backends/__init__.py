"""Translation backend implementations."""

from typing import Any, Optional

from inlinetrans.core.exceptions import ConfigurationError
from inlinetrans.core.models import API_TYPES, OverlaySettings
from ..base import TranslationBackend
from .libre_backend import LibreTranslateBackend
from .openai_backend import ChatCompletionBackend

BACKENDS = {
    "simple": LibreTranslateBackend,
    "openai": ChatCompletionBackend,
}


def create_backend(settings: OverlaySettings, http: Optional[Any] = None) -> TranslationBackend:
    """Select the backend variant for a settings snapshot."""
    backend_cls = BACKENDS.get(settings.api_type)
    if backend_cls is None:
        raise ConfigurationError(
            f"Unknown API type '{settings.api_type}'.",
            config_key="api_type",
            invalid_value=settings.api_type,
            valid_values=list(API_TYPES)
        )
    return backend_cls(settings, http=http)


__all__ = [
    'BACKENDS',
    'create_backend',
    'LibreTranslateBackend',
    'ChatCompletionBackend',
]
