"""Integration tests for the overlay controller."""

import functools

import pytest

from inlinetrans.controller import OverlayController
from inlinetrans.core.annotations import ANNOTATION_CLASS, HIDE_ORIGINAL_CLASS
from inlinetrans.core.host import RenderedView
from inlinetrans.core.session import TranslationSession


@pytest.fixture
def notices():
    return []


@pytest.fixture
def make_controller(simple_settings, fake_backend, notices):
    """Controller whose sessions share one fake backend."""
    def _make(settings=None, backend=None):
        backend = backend or fake_backend()
        factory = functools.partial(TranslationSession, backend=backend)
        controller = OverlayController(settings or simple_settings, notifier=notices.append, session_factory=factory)
        return controller
    return _make


class TestDocumentView:

    @pytest.mark.asyncio
    async def test_translate_active(self, make_controller, sample_soup):
        controller = make_controller()
        view = RenderedView(sample_soup.body)

        assert await controller.translate_active(view) is True
        assert len(sample_soup.find_all(class_=ANNOTATION_CLASS)) == 4

    @pytest.mark.asyncio
    async def test_no_view_notifies(self, make_controller, notices):
        controller = make_controller()

        assert await controller.translate_active(None) is False
        assert notices == ["InlineTrans: open a rendered document view and try again."]

    @pytest.mark.asyncio
    async def test_session_reused_for_same_view(self, make_controller, sample_soup):
        controller = make_controller()
        view = RenderedView(sample_soup.body)

        await controller.translate_active(view)
        first = controller.session
        await controller.translate_active(view)

        assert controller.session is first
        assert len(sample_soup.find_all(class_=ANNOTATION_CLASS)) == 4

    @pytest.mark.asyncio
    async def test_failure_becomes_notice(self, make_controller, fake_backend, sample_soup, notices):
        controller = make_controller(backend=fake_backend(fail_on="Getting started"))

        assert await controller.translate_active(RenderedView(sample_soup.body)) is False
        assert len(notices) == 1
        assert notices[0].startswith("InlineTrans: Backend 'fake' failed")

    def test_toggle_original(self, make_controller, sample_soup, notices):
        controller = make_controller()
        view = RenderedView(sample_soup.body)
        controller.ensure_session(view).translate_sync()
        originals = [p.original for p in controller.session.annotations]

        assert controller.toggle_original() is True
        assert all(o["class"] == [HIDE_ORIGINAL_CLASS] for o in originals)

        assert controller.toggle_original() is False
        assert all(not o.has_attr("class") for o in originals)
        assert notices == ["InlineTrans: original text hidden", "InlineTrans: original text shown"]

    def test_clear_active(self, make_controller, sample_soup):
        before = str(sample_soup)
        controller = make_controller()
        view = RenderedView(sample_soup.body)
        controller.ensure_session(view).translate_sync()

        controller.clear_active(view)
        controller.clear_active(None)

        assert str(sample_soup) == before

    @pytest.mark.asyncio
    async def test_auto_translate_on_open(self, make_controller, simple_settings, sample_soup):
        view = RenderedView(sample_soup.body)

        assert await make_controller().on_view_opened(view) is False
        assert sample_soup.find(class_=ANNOTATION_CLASS) is None

        controller = make_controller(simple_settings.with_changes(auto_translate_on_open=True))
        assert await controller.on_view_opened(view) is True
        assert sample_soup.find(class_=ANNOTATION_CLASS) is not None


class TestUiSurface:

    @pytest.mark.asyncio
    async def test_surface_toggles_between_translate_and_clear(self, make_controller, sample_soup, notices):
        before = str(sample_soup)
        controller = make_controller()
        toolbar = sample_soup.select_one(".toolbar")

        assert await controller.translate_surface(toolbar) is True
        assert toolbar.find(class_=ANNOTATION_CLASS).get_text() == "[de] Open settings panel"

        assert await controller.translate_surface(toolbar) is True
        assert str(sample_soup) == before
        assert notices == ["InlineTrans: translations cleared."]

    @pytest.mark.asyncio
    async def test_missing_surface_notifies(self, make_controller, notices):
        controller = make_controller()

        assert await controller.translate_surface(None) is False
        assert notices == ["InlineTrans: no translatable interface was found."]

    @pytest.mark.asyncio
    async def test_surface_session_independent_of_document(self, make_controller, sample_soup):
        controller = make_controller()
        view = RenderedView(sample_soup.body)

        await controller.translate_active(view)
        await controller.translate_surface(sample_soup.select_one(".toolbar"))

        assert controller.ui_session is not controller.session
        assert len(sample_soup.find_all(class_=ANNOTATION_CLASS)) == 5


def test_update_settings_reaches_sessions(make_controller, simple_settings, sample_soup):
    controller = make_controller()
    controller.ensure_session(RenderedView(sample_soup.body)).translate_sync()

    controller.update_settings(simple_settings.with_changes(to_lang="fr"))

    assert controller.session.settings.to_lang == "fr"
    assert len(controller.session.cache) == 0


def test_unload_removes_everything(make_controller, sample_soup):
    before = str(sample_soup)
    controller = make_controller()
    controller.ensure_session(RenderedView(sample_soup.body)).translate_sync()

    controller.unload()

    assert str(sample_soup) == before
    assert controller.session is None
    assert controller.ui_session is None


def test_default_notifier_logs(simple_settings, fake_backend):
    controller = OverlayController(
        simple_settings,
        session_factory=functools.partial(TranslationSession, backend=fake_backend())
    )
    assert controller.notify("ready") == "InlineTrans: ready"
