"""
Host-facing controller for the translation overlay.

Keeps one session for the active document view and a separate one for
non-document UI surfaces, and turns failures into user-visible notices so
that the host never sees an exception.
"""

from __future__ import annotations
import logging
from typing import Callable, Optional

from bs4 import Tag

from inlinetrans.core.exceptions import InlineTransError
from inlinetrans.core.host import RenderedView
from inlinetrans.core.models import OverlaySettings
from inlinetrans.core.session import TranslationSession

logger = logging.getLogger(__name__)

NOTICE_PREFIX = "InlineTrans"


def _log_notice(message: str) -> None:
    logger.info(message)


class OverlayController:
    """Owns the document session and the UI-surface session."""

    def __init__(
        self,
        settings: OverlaySettings,
        notifier: Optional[Callable[[str], None]] = None,
        session_factory: Callable[..., TranslationSession] = TranslationSession
    ):
        self.settings = settings
        self.notifier = notifier or _log_notice
        self.session_factory = session_factory
        self.session: Optional[TranslationSession] = None
        self.ui_session: Optional[TranslationSession] = None

    def notify(self, message: str) -> str:
        notice = f"{NOTICE_PREFIX}: {message}"
        self.notifier(notice)
        return notice

    def ensure_session(self, view: RenderedView) -> TranslationSession:
        """Reuse the document session for the same view, replace it otherwise."""
        if self.session is None or self.session.view is not view:
            self.session = self.session_factory(view, self.settings)
        else:
            self.session.update_settings(self.settings)
        return self.session

    async def translate_active(self, view: Optional[RenderedView]) -> bool:
        """Translate the active document view. Returns True on success."""
        if view is None:
            self.notify("open a rendered document view and try again.")
            return False
        session = self.ensure_session(view)
        return await self._run(session)

    async def translate_surface(self, target: Optional[Tag]) -> bool:
        """
        Toggle the overlay on a non-document UI surface.

        The first call translates; a call on an already translated surface
        clears it instead.
        """
        if target is None:
            self.notify("no translatable interface was found.")
            return False

        if self.ui_session is None:
            self.ui_session = self.session_factory(None, self.settings)
        else:
            self.ui_session.update_settings(self.settings)

        if self.ui_session.has_translations():
            self.ui_session.clear()
            self.notify("translations cleared.")
            return True

        return await self._run(self.ui_session, target)

    def clear_active(self, view: Optional[RenderedView]) -> None:
        if view is None:
            return
        self.ensure_session(view).clear()

    def toggle_original(self) -> bool:
        """Flip hide_original and re-apply it on the document session."""
        self.settings = self.settings.with_changes(hide_original=not self.settings.hide_original)
        if self.session is not None:
            self.session.update_settings(self.settings)
            self.session.apply_original_visibility()
        self.notify("original text hidden" if self.settings.hide_original else "original text shown")
        return self.settings.hide_original

    def update_settings(self, settings: OverlaySettings) -> None:
        self.settings = settings
        for session in (self.session, self.ui_session):
            if session is not None:
                session.update_settings(settings)

    async def on_view_opened(self, view: Optional[RenderedView]) -> bool:
        if not self.settings.auto_translate_on_open:
            return False
        return await self.translate_active(view)

    def unload(self) -> None:
        for session in (self.session, self.ui_session):
            if session is not None:
                session.clear()
        self.session = None
        self.ui_session = None

    async def _run(self, session: TranslationSession, root: Optional[Tag] = None) -> bool:
        try:
            await session.translate(root)
        except InlineTransError as e:
            logger.error(f"Translation failed: {e.message}")
            self.notify(e.message)
            return False
        except Exception as e:
            logger.exception("Unexpected translation failure")
            self.notify(str(e))
            return False
        return True
