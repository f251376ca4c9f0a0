"""Selection of translatable leaf elements from a rendered tree."""

import logging
import re
from typing import Iterable, List, Optional, Sequence, Tuple

import soupsieve
from bs4 import Tag

from inlinetrans.core.annotations import ANNOTATION_CLASS, has_class
from inlinetrans.core.exceptions import SelectorError
from inlinetrans.core.models import Block

logger = logging.getLogger(__name__)

TEXT_TAGS = (
    "p", "li", "blockquote",
    "h1", "h2", "h3", "h4", "h5", "h6",
    "td", "th", "pre", "button", "label", "span", "div",
)
CONTROL_TAGS = ["input", "textarea", "select"]

MIN_TEXT_LENGTH = 2
MAX_TEXT_LENGTH = 160  # Longer fragments break layout once annotated inline

_WHITESPACE = re.compile(r"\s+")


def normalize_text(text: Optional[str]) -> str:
    """Collapse whitespace runs to a single space and trim."""
    if not text:
        return ""
    return _WHITESPACE.sub(" ", text).strip()


def compile_selector(selector: str) -> soupsieve.SoupSieve:
    """Compile a CSS selector, raising SelectorError when it is invalid."""
    try:
        return soupsieve.compile(selector)
    except soupsieve.SelectorSyntaxError as e:
        raise SelectorError(selector, e) from e


class BlockSelector:
    """
    Walks a rendered tree and yields the leaf elements worth translating.

    Candidates are descendants of the root matching TEXT_TAGS, in document
    order. A candidate is rejected if it lies inside a skip area, belongs to
    an existing annotation, wraps an input control, has element children, or
    its normalized text is outside [MIN_TEXT_LENGTH, MAX_TEXT_LENGTH].
    """

    def __init__(
        self,
        skip_selectors: Iterable[str] = (),
        min_length: int = MIN_TEXT_LENGTH,
        max_length: int = MAX_TEXT_LENGTH
    ):
        self.min_length = min_length
        self.max_length = max_length
        self._skip: List[Tuple[str, soupsieve.SoupSieve]] = []
        self.set_skip_selectors(skip_selectors)

    @property
    def skip_selectors(self) -> Tuple[str, ...]:
        return tuple(pattern for pattern, _ in self._skip)

    def set_skip_selectors(self, selectors: Iterable[str]) -> None:
        """Replace the skip list; invalid selectors are dropped as non-matching."""
        compiled = []
        for selector in selectors or ():
            if not selector or not selector.strip():
                continue
            try:
                compiled.append((selector, compile_selector(selector)))
            except SelectorError as e:
                logger.warning(f"Ignoring invalid skip selector {selector!r}: {e.original_error}")
        self._skip = compiled

    def collect(self, root: Tag) -> List[Block]:
        """Return the eligible blocks under root, in document order."""
        blocks: List[Block] = []
        candidates = root.select(", ".join(TEXT_TAGS))
        for element in candidates:
            text = self._eligible_text(element)
            if text is None:
                continue
            blocks.append(Block(element=element, text=text, index=len(blocks)))

        logger.debug(f"Selected {len(blocks)} of {len(candidates)} candidate elements")
        return blocks

    def _eligible_text(self, element: Tag) -> Optional[str]:
        if self.in_skip_area(element):
            return None
        if is_annotation_or_inside(element):
            return None
        if element.find(CONTROL_TAGS) is not None:
            return None
        # Leaf nodes only: a container and its children would both be translated
        if element.find(True, recursive=False) is not None:
            return None

        text = normalize_text(element.get_text())
        if not text:
            return None
        if len(text) < self.min_length or len(text) > self.max_length:
            return None
        return text

    def in_skip_area(self, element: Tag) -> bool:
        for _, compiled in self._skip:
            if compiled.closest(element) is not None:
                return True
        return False


def is_annotation_or_inside(element: Tag) -> bool:
    if has_class(element, ANNOTATION_CLASS):
        return True
    return element.find_parent(class_=ANNOTATION_CLASS) is not None


def collect_blocks(root: Tag, skip_selectors: Sequence[str] = ()) -> List[Block]:
    """Convenience wrapper around BlockSelector.collect."""
    return BlockSelector(skip_selectors).collect(root)
