"""
Message translation for rule error messages.

Rule messages are looked up as translation keys first and fall back to the
message itself, so both work:

    {"validator": "not_empty", "message": "validation.required"}   # key in lang/<locale>.json
    {"validator": "not_empty", "message": "{field} is required"}   # literal template

Usage:
    from fast_rules.core.localization import __, set_locale

    __('validation.required', {'field': 'name'})
    set_locale('sk')
"""

import json
import logging
import os
from contextvars import ContextVar
from pathlib import Path
from typing import Any, Optional

_LOCALE_DEFAULT = os.getenv('LOCALE_DEFAULT', 'en')
_LOCALE_FALLBACK = os.getenv('LOCALE_FALLBACK', 'en')
_LOCALE_PATH = os.getenv('LOCALE_PATH', os.path.join(os.getcwd(), 'lang'))

_current_locale: ContextVar[str] = ContextVar('locale', default=_LOCALE_DEFAULT)
_catalogs: dict[str, dict[str, Any]] = {}


def _catalog(locale: str) -> dict[str, Any]:
    if locale not in _catalogs:
        _catalogs[locale] = _read_catalog(Path(_LOCALE_PATH) / f"{locale}.json")
    return _catalogs[locale]


def _read_catalog(path: Path) -> dict[str, Any]:
    if not path.is_file():
        return {}
    try:
        with path.open(encoding='utf-8') as f:
            data = json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        logging.warning(f"[LOCALIZATION] Ignoring unreadable locale file {path}: {e}")
        return {}
    if not isinstance(data, dict):
        logging.warning(f"[LOCALIZATION] Ignoring locale file {path}: top level must be an object")
        return {}
    return data


def lookup(key: str, locale: str) -> Optional[str]:
    """Resolve a dotted key ("validation.required") in one locale, None when absent."""
    node: Any = _catalog(locale)
    for part in key.split('.'):
        if not isinstance(node, dict) or part not in node:
            return None
        node = node[part]
    return node if isinstance(node, str) else None


def _interpolate(template: str, parameters: dict[str, Any]) -> str:
    try:
        return template.format(**parameters)
    except (KeyError, IndexError, ValueError, AttributeError):
        # placeholders the caller did not provide stay visible in the message
        return template


def __(key: str, parameters: Optional[dict[str, Any]] = None,
       default: Optional[str] = None, locale: Optional[str] = None) -> str:
    """
    Translate `key` and interpolate `parameters` with `str.format`.

    Falls back to the fallback locale, then to `default`, then to the key itself.
    """
    locale = locale or _current_locale.get()
    text = lookup(key, locale)
    if text is None and locale != _LOCALE_FALLBACK:
        text = lookup(key, _LOCALE_FALLBACK)
    if text is None:
        text = default or key
    return _interpolate(text, parameters) if parameters else text


def set_locale(locale: str) -> None:
    _current_locale.set(locale)


def get_locale() -> str:
    return _current_locale.get()


def clear_cache() -> None:
    _catalogs.clear()


def set_locale_path(path: str) -> None:
    global _LOCALE_PATH
    _LOCALE_PATH = path


trans = __
