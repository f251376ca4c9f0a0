"""
Prompt templating for chat-style backends.

Templates use three placeholders: {text}, {from} and {to}. Every occurrence
is substituted in a single pass, so braces inside the substituted text are
left alone.
"""

from __future__ import annotations
import re
from typing import Dict, List

PLACEHOLDERS = ("text", "from", "to")
_PLACEHOLDER_RE = re.compile(r"\{(text|from|to)\}")


def fill_template(template: str, text: str, source_lang: str, target_lang: str) -> str:
    """Instantiate a prompt template."""
    values = {"text": text, "from": source_lang, "to": target_lang}
    return _PLACEHOLDER_RE.sub(lambda m: values[m.group(1)], template)


def build_messages(
    text: str,
    source_lang: str,
    target_lang: str,
    user_prompt: str,
    system_prompt: str = ""
) -> List[Dict[str, str]]:
    """Build the chat message list: optional system message, then the user message."""
    messages = []
    if system_prompt and system_prompt.strip():
        messages.append({
            "role": "system",
            "content": fill_template(system_prompt, text, source_lang, target_lang)
        })
    messages.append({
        "role": "user",
        "content": fill_template(user_prompt, text, source_lang, target_lang)
    })
    return messages
