"""Translation backends and prompt templating."""

from .base import TranslationBackend, TranslationRequest, TranslationResponse
from .prompts import fill_template, build_messages

__all__ = [
    'TranslationBackend',
    'TranslationRequest',
    'TranslationResponse',
    'fill_template',
    'build_messages',
]
