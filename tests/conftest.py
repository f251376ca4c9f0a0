"""Pytest configuration and fixtures."""

import json
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import pytest
from bs4 import BeautifulSoup

from inlinetrans.core.exceptions import BackendError
from inlinetrans.core.models import OverlaySettings
from inlinetrans.translation.base import TranslationBackend, TranslationRequest, TranslationResponse


class FakeResponse:
    """Minimal stand-in for requests.Response."""

    _NO_JSON = object()

    def __init__(self, status_code=200, json_data=_NO_JSON, text=None):
        self.status_code = status_code
        self._json = json_data
        if text is None:
            text = "" if json_data is self._NO_JSON else json.dumps(json_data, ensure_ascii=False)
        self.text = text

    def json(self):
        if self._json is self._NO_JSON:
            raise ValueError("No JSON object could be decoded")
        return self._json


class FakeHttp:
    """Records POST calls and replays canned responses (the last one repeats)."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def post(self, url, json=None, headers=None, timeout=None):
        self.calls.append({"url": url, "json": json, "headers": headers, "timeout": timeout})
        response = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        if isinstance(response, Exception):
            raise response
        return response


class FakeBackend(TranslationBackend):
    """Backend that answers from a mapping, or tags the text with the target language."""

    name = "fake"

    def __init__(self, settings=None, translations=None, fail_on=None):
        super().__init__(settings or OverlaySettings(api_type="simple", api_url="http://fake"), http=object())
        self.translations = translations or {}
        self.fail_on = fail_on
        self.calls = []

    def validate(self) -> None:
        pass

    def translate_sync(self, request: TranslationRequest) -> TranslationResponse:
        self.calls.append(request.text)
        if self.fail_on is not None and request.text == self.fail_on:
            raise BackendError(self.name, "boom", status_code=500)
        translation = self.translations.get(request.text, f"[{request.target_lang}] {request.text}")
        return TranslationResponse(translation=translation, backend=self.name, model="fake")


@pytest.fixture
def fake_response():
    return FakeResponse


@pytest.fixture
def fake_http():
    return FakeHttp


@pytest.fixture
def fake_backend():
    return FakeBackend


@pytest.fixture
def simple_settings():
    """Settings for the LibreTranslate-style backend."""
    return OverlaySettings(
        api_type="simple",
        api_url="http://localhost:5000/translate",
        from_lang="en",
        to_lang="de",
    )


@pytest.fixture
def chat_settings():
    """Settings for the chat-completion backend."""
    return OverlaySettings(
        api_type="openai",
        api_url="https://api.example.com/v1/chat/completions",
        api_key="sk-test",
        model="gpt-4o-mini",
        from_lang="en",
        to_lang="zh",
        system_prompt="",
        user_prompt="Translate {text} from {from} to {to}",
    )


@pytest.fixture
def sample_html():
    return """
    <html><head><title>Doc</title></head><body>
      <nav class="toolbar"><span>Open settings panel</span></nav>
      <div class="markdown-preview-view">
        <h1>Getting started</h1>
        <p>Install the package and open a document.</p>
        <ul><li>Select a backend</li><li>Pick a language</li></ul>
        <p>x</p>
        <p><strong>Nested</strong> content is skipped</p>
      </div>
    </body></html>
    """


@pytest.fixture
def sample_soup(sample_html):
    return BeautifulSoup(sample_html, "html.parser")
