"""
InlineTrans: inline machine-translation overlays for rendered documents

Locates translatable leaf fragments in a rendered HTML tree, translates each
through a pluggable backend, inserts the result as a sibling annotation and
can reversibly hide the originals.

Usage:
    from bs4 import BeautifulSoup
    from inlinetrans import TranslationSession, RenderedView, OverlaySettings

    soup = BeautifulSoup(html, "html.parser")
    settings = OverlaySettings(api_type="simple", api_url="http://localhost:5000/translate")
    session = TranslationSession(RenderedView(soup), settings)
    session.translate_sync()
"""

__version__ = "1.0.0"
__license__ = "MIT"

from inlinetrans.core.models import (
    Block,
    OverlaySettings,
    SessionState,
    TranslationPair
)
from inlinetrans.core.exceptions import (
    InlineTransError,
    NoTargetError,
    ConfigurationError,
    ConfigError,
    EmptyResultError,
    BackendError,
    SelectorError
)
from inlinetrans.core.host import RenderedView
from inlinetrans.core.annotations import AnnotationManager
from inlinetrans.core.session import TranslationSession
from inlinetrans.extraction.selector import BlockSelector, normalize_text
from inlinetrans.translation.base import (
    TranslationBackend,
    TranslationRequest,
    TranslationResponse
)
from inlinetrans.translation.backends import (
    create_backend,
    LibreTranslateBackend,
    ChatCompletionBackend
)
from inlinetrans.controller import OverlayController

__all__ = [
    "__version__",
    "Block", "OverlaySettings", "SessionState", "TranslationPair",
    "InlineTransError", "NoTargetError", "ConfigurationError", "ConfigError",
    "EmptyResultError", "BackendError", "SelectorError",
    "RenderedView", "AnnotationManager", "TranslationSession",
    "BlockSelector", "normalize_text",
    "TranslationBackend", "TranslationRequest", "TranslationResponse",
    "create_backend", "LibreTranslateBackend", "ChatCompletionBackend",
    "OverlayController",
]
