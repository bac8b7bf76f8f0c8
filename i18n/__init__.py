"""String tables for SkinScan.

Each language lives in i18n/<code>.json. Lookups fall back from the active
language to English and finally to the key itself, so a missing entry shows
up as its key rather than breaking the UI.

Usage: from i18n import t; t("log.date", date=...)
"""

import json
import logging
import sys
from pathlib import Path
from typing import Dict, Optional

logger = logging.getLogger(__name__)

FALLBACK_LANGUAGE = "en"
LANGUAGES: Dict[str, str] = {
    "en": "English",
}

_active: Dict[str, object] = {}
_fallback: Dict[str, object] = {}
_language = FALLBACK_LANGUAGE


def _table_dir() -> Path:
    if getattr(sys, "frozen", False):
        return Path(sys._MEIPASS) / "i18n"
    return Path(__file__).parent


def _read_table(code: str) -> Dict[str, object]:
    path = _table_dir() / f"{code}.json"
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError:
        logger.warning("No string table for language %r", code)
    except json.JSONDecodeError as e:
        logger.error("String table %s is not valid JSON: %s", path, e)
    return {}


def init(language: Optional[str] = None):
    """Load the string tables. Call once before building any widget.

    Without an explicit language the stored preference is used.
    """
    global _active, _fallback, _language
    if language is None:
        from core.settings import AppSettings
        language = AppSettings().language
    _language = language if language in LANGUAGES else FALLBACK_LANGUAGE

    _fallback = _read_table(FALLBACK_LANGUAGE)
    _active = _fallback if _language == FALLBACK_LANGUAGE else _read_table(_language)


def t(key: str, **kwargs) -> str:
    """Look up a string and fill in its {placeholders}."""
    text = _active.get(key) or _fallback.get(key) or key
    if not kwargs:
        return text
    try:
        return text.format(**kwargs)
    except (KeyError, IndexError, ValueError):
        return text


def get_current_language() -> str:
    return _language


def is_rtl() -> bool:
    meta = _active.get("_meta")
    return isinstance(meta, dict) and meta.get("direction") == "rtl"
