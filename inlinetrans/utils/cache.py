"""Per-session translation cache."""

import logging
from typing import Optional, Dict, Any

from inlinetrans.extraction.selector import normalize_text

logger = logging.getLogger(__name__)


class FragmentCache:
    """
    In-memory cache of fragment translations.

    Keys are normalized text, so fragments that differ only in whitespace
    share an entry. There is no eviction: a session's vocabulary is bounded
    by the visible text of one document.
    """

    def __init__(self):
        self.memory_cache: Dict[str, str] = {}
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self.memory_cache)

    def __contains__(self, text: str) -> bool:
        return normalize_text(text) in self.memory_cache

    def lookup(self, text: str) -> Optional[str]:
        """
        Get cached translation.

        Args:
            text: Source text (normalized before lookup)

        Returns:
            Cached translation or None
        """
        result = self.memory_cache.get(normalize_text(text))
        if result is None:
            self.misses += 1
        else:
            self.hits += 1
        return result

    def store(self, text: str, translation: str) -> None:
        """Cache a translation for the normalized form of text."""
        key = normalize_text(text)
        if not key:
            return
        self.memory_cache[key] = translation

    def clear(self) -> None:
        """Clear all cache."""
        if self.memory_cache:
            logger.debug(f"Dropping {len(self.memory_cache)} cached translations")
        self.memory_cache.clear()
        self.hits = 0
        self.misses = 0

    def get_stats(self) -> Dict[str, Any]:
        """Get cache statistics."""
        total = self.hits + self.misses
        return {
            "type": "memory",
            "size": len(self.memory_cache),
            "hits": self.hits,
            "misses": self.misses,
            "hit_rate": self.hits / total if total else 0.0,
        }
