"""Utility functions and helpers."""

from .logger import setup_logger
from .cache import FragmentCache
from .config_loader import load_config, load_settings, settings_from_dict

__all__ = [
    'setup_logger',
    'FragmentCache',
    'load_config',
    'load_settings',
    'settings_from_dict'
]
