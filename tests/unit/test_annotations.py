"""Unit tests for annotation management."""

import pytest
from bs4 import BeautifulSoup

from inlinetrans.core.annotations import (
    ANNOTATION_CLASS,
    HIDE_ORIGINAL_CLASS,
    STYLESHEET_ID,
    AnnotationManager,
    add_class,
    has_class,
    inject_stylesheet,
    remove_class,
    strip_annotations,
)


@pytest.fixture
def soup():
    return BeautifulSoup('<div><p id="a">Alpha text</p><p id="b">Beta text</p></div>', "html.parser")


class TestAnnotationManager:
    """Insertion, removal and visibility of annotations."""

    def test_insert_places_annotation_after_original(self, soup):
        manager = AnnotationManager()
        original = soup.find(id="a")

        annotation = manager.insert(original, "Alpha übersetzt")

        assert original.find_next_sibling() is annotation
        assert annotation.name == "div"
        assert has_class(annotation, ANNOTATION_CLASS)
        assert annotation.get_text() == "Alpha übersetzt"
        assert manager.annotation_for(original) is annotation
        assert manager.pairs()[0].had_class is False
        assert original in manager
        assert len(manager) == 1

    def test_one_annotation_per_original(self, soup):
        """Re-inserting for the same original replaces the previous annotation."""
        manager = AnnotationManager()
        original = soup.find(id="a")

        manager.insert(original, "first")
        manager.insert(original, "second")

        annotations = soup.find_all(class_=ANNOTATION_CLASS)
        assert len(annotations) == 1
        assert annotations[0].get_text() == "second"
        assert len(manager) == 1

    def test_pairs_are_keyed_by_identity(self):
        """Structurally equal originals get distinct annotations."""
        soup = BeautifulSoup("<p>Same text</p><p>Same text</p>", "html.parser")
        first, second = soup.find_all("p")
        assert first == second  # bs4 compares by value

        manager = AnnotationManager()
        manager.insert(first, "one")
        manager.insert(second, "two")

        assert len(manager) == 2
        assert manager.annotation_for(first).get_text() == "one"
        assert manager.annotation_for(second).get_text() == "two"

    def test_remove_all_restores_tree(self, soup):
        before = str(soup)
        manager = AnnotationManager()
        for p in soup.find_all("p"):
            manager.insert(p, "translated")
        manager.set_originals_hidden(True)

        removed = manager.remove_all()

        assert removed == 2
        assert len(manager) == 0
        assert str(soup) == before

    def test_remove_all_twice_is_safe(self, soup):
        manager = AnnotationManager()
        manager.insert(soup.find(id="a"), "translated")

        manager.remove_all()
        assert manager.remove_all() == 0
        assert soup.find(class_=ANNOTATION_CLASS) is None

    def test_hide_and_restore_originals(self, soup):
        manager = AnnotationManager()
        originals = soup.find_all("p")
        for p in originals:
            manager.insert(p, "translated")

        manager.set_originals_hidden(True)
        manager.set_originals_hidden(True)
        assert all(p.get("class") == [HIDE_ORIGINAL_CLASS] for p in originals)

        manager.set_originals_hidden(False)
        assert all(not p.has_attr("class") for p in originals)

    def test_visibility_with_no_pairs(self):
        manager = AnnotationManager()
        manager.set_originals_hidden(True)
        manager.set_originals_hidden(False)
        assert manager.pairs() == []


def test_class_helpers_keep_existing_classes():
    tag = BeautifulSoup('<p class="lead note">Text here</p>', "html.parser").p

    add_class(tag, HIDE_ORIGINAL_CLASS)
    assert tag["class"] == ["lead", "note", HIDE_ORIGINAL_CLASS]

    remove_class(tag, HIDE_ORIGINAL_CLASS)
    assert tag["class"] == ["lead", "note"]

    remove_class(tag, "missing")
    assert tag["class"] == ["lead", "note"]


def test_rerendered_subtree_does_not_break_cleanup():
    """Originals and annotations destroyed by the host are skipped, not touched."""
    soup = BeautifulSoup("<div><section><p>Hello there</p></section><p id=\"kept\">Still here</p></div>", "html.parser")
    manager = AnnotationManager()
    manager.insert(soup.find("section").p, "Hallo")
    manager.insert(soup.find(id="kept"), "Noch da")
    manager.set_originals_hidden(True)

    soup.find("section").decompose()
    manager.set_originals_hidden(False)
    manager.set_originals_hidden(True)

    assert manager.remove_all() == 1
    assert len(manager) == 0
    assert str(soup) == '<div><p id="kept">Still here</p></div>'


def test_empty_class_attribute_survives_round_trip():
    soup = BeautifulSoup('<div><p class="">Hello there</p><p>Plain text</p></div>', "html.parser")
    before = str(soup)
    manager = AnnotationManager()
    for p in soup.find_all("p"):
        manager.insert(p, "translated")

    manager.set_originals_hidden(True)
    manager.set_originals_hidden(False)
    assert str(soup).count('class=""') == 1

    manager.set_originals_hidden(True)
    manager.remove_all()
    assert str(soup) == before


def test_strip_annotations_from_saved_document(soup):
    manager = AnnotationManager()
    for p in soup.find_all("p"):
        manager.insert(p, "translated")
    manager.set_originals_hidden(True)
    saved = BeautifulSoup(str(soup), "html.parser")

    removed = strip_annotations(saved)

    assert removed == 2
    assert saved.find(class_=ANNOTATION_CLASS) is None
    assert saved.find(class_=HIDE_ORIGINAL_CLASS) is None


def test_inject_stylesheet_once():
    soup = BeautifulSoup("<html><body><p>Body text</p></body></html>", "html.parser")

    inject_stylesheet(soup)
    inject_stylesheet(soup)

    styles = soup.find_all("style", id=STYLESHEET_ID)
    assert len(styles) == 1
    assert soup.head is not None
    assert HIDE_ORIGINAL_CLASS in styles[0].string
