"""
Translation session for InlineTrans.

A session binds one rendered target to a settings snapshot and orchestrates
the overlay: it selects blocks, resolves each through the fragment cache or
the backend, inserts annotations and applies the original-visibility policy.
"""

from __future__ import annotations
import asyncio
import logging
from typing import Any, Callable, List, Optional

from bs4 import Tag

from inlinetrans.core.annotations import AnnotationManager
from inlinetrans.core.exceptions import EmptyResultError, NoTargetError
from inlinetrans.core.host import RenderedView
from inlinetrans.core.models import Block, OverlaySettings, SessionState, TranslationPair
from inlinetrans.extraction.selector import BlockSelector, MIN_TEXT_LENGTH, normalize_text
from inlinetrans.translation.backends import create_backend
from inlinetrans.translation.base import TranslationBackend, TranslationRequest
from inlinetrans.utils.cache import FragmentCache

logger = logging.getLogger(__name__)


class TranslationSession:
    """Overlay translation for one view or UI surface."""

    def __init__(
        self,
        view: Optional[RenderedView],
        settings: OverlaySettings,
        fallback_root: Optional[Tag] = None,
        backend: Optional[TranslationBackend] = None,
        progress_callback: Optional[Callable[[int, int], None]] = None,
        http: Optional[Any] = None
    ):
        """
        Args:
            view: Bound document view, or None for a non-document surface
            settings: Settings snapshot
            fallback_root: Root used when neither an override nor a view is given
            backend: Pre-built backend; by default one is created from settings
            progress_callback: Called with (done, total) after each block
            http: requests.Session-compatible transport passed to created backends
        """
        self.view = view
        self.fallback_root = fallback_root
        self.progress_callback = progress_callback
        self.state = SessionState.IDLE

        self._http = http
        self._fixed_backend = backend is not None
        self.settings = settings
        self.backend = backend or create_backend(settings, http=http)
        self.selector = BlockSelector(settings.skip_selectors)
        self.annotations = AnnotationManager()
        self.cache = FragmentCache()

    def update_settings(self, settings: OverlaySettings) -> None:
        """Replace the snapshot. Nothing is retranslated or re-applied."""
        previous = self.settings
        self.settings = settings
        if previous.affects_translation(settings):
            # Cached text was produced for the old language/backend/prompt
            self.cache.clear()
        if not self._fixed_backend:
            self.backend = create_backend(settings, http=self._http)
        self.selector.set_skip_selectors(settings.skip_selectors)

    async def translate(self, root: Optional[Tag] = None) -> List[TranslationPair]:
        """
        Translate every eligible block under the effective root.

        Any block failure aborts the remaining blocks and propagates;
        annotations inserted before the failure stay in place.

        Returns:
            The pairs created by this run, in document order
        """
        self.clear()
        target = self._resolve_root(root)
        self.backend.validate()

        self.state = SessionState.TRANSLATING
        blocks = self.selector.collect(target)
        logger.info(f"Translating {len(blocks)} blocks with backend '{self.backend.name}'")

        try:
            for done, block in enumerate(blocks, start=1):
                await self._translate_block(block)
                if self.progress_callback:
                    self.progress_callback(done, len(blocks))
        except Exception:
            # Partial annotations stay until the next clear()
            self.state = SessionState.IDLE
            raise
        finally:
            self.apply_original_visibility()

        self.state = SessionState.POPULATED if self.has_translations() else SessionState.IDLE
        logger.debug(f"Cache stats: {self.cache.get_stats()}")
        return self.annotations.pairs()

    def translate_sync(self, root: Optional[Tag] = None) -> List[TranslationPair]:
        """Blocking variant of translate() for synchronous callers."""
        return asyncio.run(self.translate(root))

    async def _translate_block(self, block: Block) -> None:
        text = normalize_text(block.text)
        if not text or len(text) < MIN_TEXT_LENGTH:
            return

        translated = await self.translate_text(text)
        self.annotations.insert(block.element, translated, source_text=text)

    async def translate_text(self, text: str) -> str:
        """Resolve one fragment through the cache, then the backend."""
        cached = self.cache.lookup(text)
        if cached:
            return cached

        request = TranslationRequest(
            text=text,
            source_lang=self.settings.from_lang,
            target_lang=self.settings.to_lang,
        )
        response = await self.backend.translate(request)
        if not response.translation:
            raise EmptyResultError(text, backend=self.backend.name)

        self.cache.store(text, response.translation)
        return response.translation

    def clear(self) -> None:
        """Remove all annotations and restore originals. Safe in any state."""
        self.annotations.remove_all()
        self.state = SessionState.IDLE

    def apply_original_visibility(self) -> None:
        self.annotations.set_originals_hidden(self.settings.hide_original)

    def has_translations(self) -> bool:
        return len(self.annotations) > 0

    def _resolve_root(self, override: Optional[Tag]) -> Tag:
        if override is not None:
            return override
        if self.view is not None:
            root = self.view.find_preview_root()
            if root is not None:
                return root
        if self.fallback_root is not None:
            return self.fallback_root
        raise NoTargetError()
