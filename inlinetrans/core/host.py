"""Rendering surface the overlay is applied to."""

import logging
from typing import Optional, Sequence

from bs4 import Tag

logger = logging.getLogger(__name__)

PREVIEW_SELECTORS = (
    ".markdown-reading-view .markdown-preview-view",
    ".markdown-preview-view",
    ".markdown-reading-view",
)


class RenderedView:
    """
    A rendered document view.

    The view owns a container element; its preview root is the first
    descendant matching one of the preview selectors, or the container
    itself when none matches.
    """

    def __init__(
        self,
        container: Tag,
        preview_selectors: Sequence[str] = PREVIEW_SELECTORS,
        name: Optional[str] = None
    ):
        self.container = container
        self.preview_selectors = tuple(preview_selectors)
        self.name = name or container.name or "document"

    def find_preview_root(self) -> Optional[Tag]:
        for selector in self.preview_selectors:
            root = self.container.select_one(selector)
            if root is not None:
                return root
        return self.container

    def __repr__(self) -> str:
        return f"RenderedView(name={self.name!r})"
