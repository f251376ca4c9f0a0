"""
Annotation management for the translation overlay.

Each original element gets at most one sibling annotation holding its
translation. Pairs are keyed by element identity: bs4 tags compare by value,
so two equal paragraphs must still map to distinct annotations.
"""

from __future__ import annotations
import logging
from typing import Dict, Iterator, List, Optional

from bs4 import BeautifulSoup, Tag

from inlinetrans.core.models import TranslationPair

logger = logging.getLogger(__name__)

ANNOTATION_CLASS = "inline-translation"
HIDE_ORIGINAL_CLASS = "inline-hide-original"

OVERLAY_CSS = f"""
.{ANNOTATION_CLASS} {{
  color: #5b6b7a;
  border-left: 3px solid #9ab;
  padding-left: 0.5em;
  margin: 0.25em 0 0.75em;
}}
.{HIDE_ORIGINAL_CLASS} {{
  display: none !important;
}}
"""
STYLESHEET_ID = "inline-translation-style"


def get_classes(element: Tag) -> List[str]:
    classes = element.get("class") or []
    if isinstance(classes, str):
        classes = classes.split()
    return list(classes)


def has_class(element: Tag, name: str) -> bool:
    return name in get_classes(element)


def add_class(element: Tag, name: str) -> None:
    classes = get_classes(element)
    if name not in classes:
        classes.append(name)
        element["class"] = classes


def remove_class(element: Tag, name: str, drop_empty: bool = True) -> None:
    """Remove a class; an emptied attribute is deleted unless drop_empty is False."""
    classes = get_classes(element)
    if name not in classes:
        return
    classes = [c for c in classes if c != name]
    if classes or not drop_empty:
        element["class"] = classes
    else:
        del element["class"]


class AnnotationManager:
    """Owns the original -> annotation mapping of one session."""

    def __init__(self, tag_name: str = "div"):
        self.tag_name = tag_name
        self._pairs: Dict[int, TranslationPair] = {}
        self._factory = BeautifulSoup("", "html.parser")

    def __len__(self) -> int:
        return len(self._pairs)

    def __contains__(self, original: Tag) -> bool:
        return id(original) in self._pairs

    def __iter__(self) -> Iterator[TranslationPair]:
        return iter(list(self._pairs.values()))

    def pairs(self) -> List[TranslationPair]:
        """Current pairs in insertion (document) order."""
        return list(self._pairs.values())

    def annotation_for(self, original: Tag) -> Optional[Tag]:
        pair = self._pairs.get(id(original))
        return pair.annotation if pair else None

    def insert(self, original: Tag, translated: str, source_text: str = "") -> Tag:
        """Insert an annotation right after original and register the pair."""
        existing = self._pairs.pop(id(original), None)
        if existing is not None:
            had_class = existing.had_class
            if not existing.annotation.decomposed:
                existing.annotation.decompose()
        else:
            had_class = original.has_attr("class")

        annotation = self._factory.new_tag(self.tag_name, attrs={"class": [ANNOTATION_CLASS]})
        annotation.string = translated
        original.insert_after(annotation)

        self._pairs[id(original)] = TranslationPair(
            original=original,
            annotation=annotation,
            source_text=source_text,
            translated_text=translated,
            had_class=had_class,
        )
        return annotation

    def remove_all(self) -> int:
        """
        Remove every tracked annotation and restore originals. Never raises.

        Pairs whose nodes were already destroyed by a re-render are dropped
        without touching them.
        """
        removed = 0
        for pair in self._pairs.values():
            self._restore(pair)
            if not pair.annotation.decomposed:
                pair.annotation.decompose()
                removed += 1
        self._pairs.clear()
        if removed:
            logger.debug(f"Removed {removed} annotations")
        return removed

    def set_originals_hidden(self, hidden: bool) -> None:
        for pair in self._pairs.values():
            if pair.original.decomposed:
                continue
            if hidden:
                add_class(pair.original, HIDE_ORIGINAL_CLASS)
            else:
                self._restore(pair)

    @staticmethod
    def _restore(pair: TranslationPair) -> None:
        if not pair.original.decomposed:
            remove_class(pair.original, HIDE_ORIGINAL_CLASS, drop_empty=not pair.had_class)


def strip_annotations(root: Tag) -> int:
    """Remove every overlay artifact found under root (e.g. in a saved file)."""
    annotations = root.find_all(class_=ANNOTATION_CLASS)
    for annotation in annotations:
        annotation.decompose()
    for original in root.find_all(class_=HIDE_ORIGINAL_CLASS):
        remove_class(original, HIDE_ORIGINAL_CLASS)
    style = root.find("style", id=STYLESHEET_ID)
    if style is not None:
        style.decompose()
    return len(annotations)


def inject_stylesheet(soup: BeautifulSoup) -> Tag:
    """Add the overlay stylesheet to <head> once."""
    existing = soup.find("style", id=STYLESHEET_ID)
    if existing is not None:
        return existing

    style = soup.new_tag("style", id=STYLESHEET_ID)
    style.string = OVERLAY_CSS
    head = soup.head
    if head is None:
        head = soup.new_tag("head")
        if soup.html is not None:
            soup.html.insert(0, head)
        else:
            soup.insert(0, head)
    head.append(style)
    return style
