"""Basic usage examples for InlineTrans."""

import asyncio

from bs4 import BeautifulSoup

from inlinetrans import OverlayController, OverlaySettings, RenderedView, TranslationSession
from inlinetrans.core.annotations import inject_stylesheet

SAMPLE_HTML = """
<html><body>
  <nav class="toolbar"><span>Settings</span></nav>
  <div class="markdown-preview-view">
    <h1>Getting started</h1>
    <p>Install the package and open a document.</p>
    <ul><li>Select a backend</li><li>Pick a target language</li></ul>
  </div>
</body></html>
"""


def example_1_simple_backend():
    """Example 1: LibreTranslate-compatible endpoint."""

    print("=" * 60)
    print("Example 1: Simple backend")
    print("=" * 60)

    soup = BeautifulSoup(SAMPLE_HTML, "html.parser")
    settings = OverlaySettings(
        api_type="simple",
        api_url="http://localhost:5000/translate",
        from_lang="en",
        to_lang="de",
        skip_selectors=(".toolbar",),
    )

    session = TranslationSession(RenderedView(soup.body), settings)
    pairs = session.translate_sync()

    inject_stylesheet(soup)
    with open("output_simple.html", "w", encoding="utf-8") as f:
        f.write(str(soup))

    print(f"✓ Translated {len(pairs)} blocks")
    print(f"✓ Output saved to output_simple.html")


def example_2_chat_backend():
    """Example 2: OpenAI-compatible chat completions with originals hidden."""

    print("\n" + "=" * 60)
    print("Example 2: Chat backend, originals hidden")
    print("=" * 60)

    soup = BeautifulSoup(SAMPLE_HTML, "html.parser")
    settings = OverlaySettings(
        api_type="openai",
        api_key="sk-...",
        model="gpt-4o-mini",
        from_lang="en",
        to_lang="ja",
        hide_original=True,
    )

    session = TranslationSession(RenderedView(soup.body), settings)
    session.translate_sync()
    print(f"✓ {len(session.annotations)} annotations, originals hidden")

    # Show the originals again without retranslating
    session.update_settings(settings.with_changes(hide_original=False))
    session.apply_original_visibility()
    print("✓ Originals visible again")


def example_3_controller_toggle():
    """Example 3: Toggle an overlay on a UI surface through the controller."""

    print("\n" + "=" * 60)
    print("Example 3: Controller toggle")
    print("=" * 60)

    soup = BeautifulSoup(SAMPLE_HTML, "html.parser")
    controller = OverlayController(
        OverlaySettings(api_type="simple", api_url="http://localhost:5000/translate"),
        notifier=print
    )

    surface = soup.select_one(".toolbar")
    asyncio.run(controller.translate_surface(surface))  # translates
    asyncio.run(controller.translate_surface(surface))  # clears


if __name__ == "__main__":
    import sys

    if len(sys.argv) > 1:
        example_num = sys.argv[1]
        examples = {
            "1": example_1_simple_backend,
            "2": example_2_chat_backend,
            "3": example_3_controller_toggle,
        }

        if example_num in examples:
            examples[example_num]()
        else:
            print(f"Example {example_num} not found")
    else:
        print("Usage: python basic_usage.py <example_number>")
        print("\nAvailable examples:")
        print("  1 - Simple backend")
        print("  2 - Chat backend with hidden originals")
        print("  3 - Controller toggle on a UI surface")
