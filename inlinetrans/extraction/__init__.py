"""Block selection from rendered trees."""

from .selector import BlockSelector, collect_blocks, normalize_text

__all__ = ['BlockSelector', 'collect_blocks', 'normalize_text']
