"""Configuration loading and management."""

import os
import re
from dataclasses import fields
from pathlib import Path
from typing import Dict, Any, Optional

import yaml
from dotenv import load_dotenv

from inlinetrans.core.exceptions import ConfigurationError
from inlinetrans.core.models import (
    API_TYPES,
    DEFAULT_FROM_LANG,
    DEFAULT_TO_LANG,
    OverlaySettings,
)

DEFAULT_SETTINGS = OverlaySettings()

# Original camelCase keys -> settings fields
KEY_ALIASES = {
    "apiType": "api_type",
    "apiUrl": "api_url",
    "apiKey": "api_key",
    "fromLang": "from_lang",
    "toLang": "to_lang",
    "systemPrompt": "system_prompt",
    "userPrompt": "user_prompt",
    "skipSelectors": "skip_selectors",
    "hideOriginal": "hide_original",
    "autoTranslateOnOpen": "auto_translate_on_open",
}

ENV_MAPPINGS = {
    "INLINETRANS_API_TYPE": "api_type",
    "INLINETRANS_API_URL": "api_url",
    "INLINETRANS_API_KEY": "api_key",
    "INLINETRANS_MODEL": "model",
    "INLINETRANS_FROM_LANG": "from_lang",
    "INLINETRANS_TO_LANG": "to_lang",
}

_FIELD_NAMES = {f.name for f in fields(OverlaySettings)}
_BOOL_FIELDS = {"hide_original", "auto_translate_on_open"}


def find_config_file() -> Optional[Path]:
    """Return the first existing default config file, if any."""
    possible_paths = [
        Path("configs/default.yaml"),
        Path.home() / ".inlinetrans" / "config.yaml",
    ]
    for path in possible_paths:
        if path.exists():
            return path
    return None


def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load configuration from YAML file, .env and environment variables.

    Args:
        config_path: Path to config file (defaults to configs/default.yaml,
            then ~/.inlinetrans/config.yaml)

    Returns:
        Configuration dictionary with settings field names as keys
    """
    config: Dict[str, Any] = {}

    if config_path is None:
        found = find_config_file()
        config_path = str(found) if found else None

    if config_path is not None:
        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        with open(path, 'r', encoding='utf-8') as f:
            loaded = yaml.safe_load(f) or {}
        if not isinstance(loaded, dict):
            raise ConfigurationError(f"Invalid configuration file {path}: expected a mapping at the root.")
        # Settings may be nested under a "translator" section
        config.update(_canonical_keys(loaded.get("translator", loaded)))

    load_dotenv()
    return override_with_env(config)


def override_with_env(config: Dict[str, Any]) -> Dict[str, Any]:
    """Override config with environment variables."""
    for env_var, key in ENV_MAPPINGS.items():
        value = os.getenv(env_var)
        if value:
            config[key] = value

    if not config.get("api_key"):
        fallback = os.getenv("OPENAI_API_KEY")
        if fallback and config.get("api_type", DEFAULT_SETTINGS.api_type) == "openai":
            config["api_key"] = fallback

    return config


def settings_from_dict(data: Dict[str, Any], base: OverlaySettings = DEFAULT_SETTINGS) -> OverlaySettings:
    """Build a settings snapshot from a plain mapping; unknown keys are ignored."""
    values = {k: v for k, v in _canonical_keys(data).items() if k in _FIELD_NAMES and v is not None}

    if "api_type" in values:
        api_type = str(values["api_type"]).strip().lower()
        if api_type not in API_TYPES:
            raise ConfigurationError(
                f"Unknown API type '{values['api_type']}'.",
                config_key="api_type",
                invalid_value=values["api_type"],
                valid_values=list(API_TYPES)
            )
        values["api_type"] = api_type

    for key in ("api_url", "api_key", "model"):
        if key in values:
            values[key] = str(values[key]).strip()

    # Blank languages fall back to the defaults
    if "from_lang" in values:
        values["from_lang"] = str(values["from_lang"]).strip() or DEFAULT_FROM_LANG
    if "to_lang" in values:
        values["to_lang"] = str(values["to_lang"]).strip() or DEFAULT_TO_LANG

    if "skip_selectors" in values:
        values["skip_selectors"] = parse_selector_list(values["skip_selectors"])

    for key in _BOOL_FIELDS & values.keys():
        values[key] = _to_bool(values[key])

    if "timeout" in values:
        try:
            values["timeout"] = float(values["timeout"])
        except (TypeError, ValueError) as e:
            raise ConfigurationError(
                f"Invalid timeout: {values['timeout']!r}",
                config_key="timeout",
                invalid_value=values["timeout"]
            ) from e

    return base.with_changes(**values)


def load_settings(config_path: Optional[str] = None, **overrides: Any) -> OverlaySettings:
    """Load a settings snapshot; explicit overrides win over files and environment."""
    config = load_config(config_path)
    config.update({k: v for k, v in overrides.items() if v is not None})
    return settings_from_dict(config)


def parse_selector_list(value: Any) -> tuple:
    """Accept a list or a newline/comma separated string of selectors."""
    if isinstance(value, str):
        items = re.split(r"\n|,", value)
    else:
        items = list(value)
    return tuple(str(s).strip() for s in items if s and str(s).strip())


def _canonical_keys(data: Dict[str, Any]) -> Dict[str, Any]:
    return {KEY_ALIASES.get(k, k): v for k, v in (data or {}).items()}


def _to_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return bool(value)
