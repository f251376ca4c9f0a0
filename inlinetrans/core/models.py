"""
Core data models for InlineTrans.

Blocks wrap rendered elements selected for translation, pairs link an
original element to the annotation inserted after it, and the settings
snapshot freezes the configuration a session works with.
"""

from __future__ import annotations
from dataclasses import dataclass, asdict, replace
from enum import Enum
from typing import Tuple, Dict, Any

from bs4 import Tag


API_TYPES = ("simple", "openai")

DEFAULT_API_URL = "https://api.openai.com/v1/chat/completions"
DEFAULT_MODEL = "gpt-4o-mini"
DEFAULT_FROM_LANG = "auto"
DEFAULT_TO_LANG = "zh"
DEFAULT_SYSTEM_PROMPT = (
    "You are a translation engine. Preserve meaning, formatting, punctuation, "
    "and code blocks. Do not add explanations."
)
DEFAULT_USER_PROMPT = (
    "Translate the following text from {from} to {to}. Reply with translation only.\n\n{text}"
)

# Fields whose change invalidates previously cached translations
TRANSLATION_FIELDS = (
    "api_type", "api_url", "model", "from_lang", "to_lang",
    "system_prompt", "user_prompt",
)


class SessionState(Enum):
    """Lifecycle states of a translation session."""
    IDLE = "idle"
    TRANSLATING = "translating"
    POPULATED = "populated"


@dataclass(frozen=True)
class OverlaySettings:
    """Immutable snapshot of the overlay configuration."""

    # Backend selection
    api_type: str = "openai"  # simple, openai
    api_url: str = DEFAULT_API_URL
    api_key: str = ""
    model: str = DEFAULT_MODEL

    # Languages
    from_lang: str = DEFAULT_FROM_LANG
    to_lang: str = DEFAULT_TO_LANG

    # Chat prompts ({text}, {from}, {to} placeholders)
    system_prompt: str = DEFAULT_SYSTEM_PROMPT
    user_prompt: str = DEFAULT_USER_PROMPT

    # Overlay behaviour
    skip_selectors: Tuple[str, ...] = ()
    hide_original: bool = False
    auto_translate_on_open: bool = False

    timeout: float = 30.0  # Seconds per backend request

    def __post_init__(self):
        # Accept any iterable of selectors but store a tuple
        if not isinstance(self.skip_selectors, tuple):
            object.__setattr__(self, "skip_selectors", tuple(self.skip_selectors))

    def with_changes(self, **changes: Any) -> "OverlaySettings":
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)

    def affects_translation(self, other: "OverlaySettings") -> bool:
        """True if switching to ``other`` can change translated output."""
        return any(getattr(self, name) != getattr(other, name) for name in TRANSLATION_FIELDS)

    def to_dict(self, mask_secrets: bool = True) -> Dict[str, Any]:
        data = asdict(self)
        data["skip_selectors"] = list(self.skip_selectors)
        if mask_secrets and self.api_key:
            data["api_key"] = self.api_key[:3] + "..." if len(self.api_key) > 6 else "***"
        return data


@dataclass
class Block:
    """A rendered element selected as one translation unit."""
    element: Tag
    text: str  # Normalized text content
    index: int = 0  # Position in selection order

    @property
    def key(self) -> int:
        """Identity of the underlying element."""
        return id(self.element)

    def __repr__(self) -> str:
        preview = self.text if len(self.text) <= 30 else self.text[:27] + "..."
        return f"Block(index={self.index}, tag={self.element.name!r}, text={preview!r})"


@dataclass
class TranslationPair:
    """Association between an original element and its annotation."""
    original: Tag
    annotation: Tag
    source_text: str = ""
    translated_text: str = ""
    had_class: bool = False  # Original carried a class attribute before the overlay

    @property
    def key(self) -> int:
        return id(self.original)
