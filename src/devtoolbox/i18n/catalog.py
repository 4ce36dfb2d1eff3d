"""Message catalog.

Locale files live next to this module in ``locales/<code>.json``.  Each file
is a nested JSON object; messages are addressed by dotted keys such as
``tools.cron.field.every``.

The active locale is always passed in explicitly -- there is no process-wide
"current locale".
"""

from __future__ import annotations

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Any

from devtoolbox.settings import settings

logger = logging.getLogger(__name__)

LOCALES_DIR = Path(__file__).parent / "locales"


def _flatten(tree: dict[str, Any], prefix: str = "") -> dict[str, str]:
    """Flatten a nested message tree into ``{"a.b.c": "text"}`` form."""
    flat: dict[str, str] = {}
    for key, value in tree.items():
        dotted = f"{prefix}.{key}" if prefix else key
        if isinstance(value, dict):
            flat.update(_flatten(value, dotted))
        else:
            flat[dotted] = str(value)
    return flat


@lru_cache(maxsize=None)
def load_messages(locale: str) -> dict[str, str]:
    """Return the flattened messages for *locale*.

    Returns an empty dict when no locale file exists for the code.
    """
    path = LOCALES_DIR / f"{locale}.json"
    if not path.is_file():
        logger.debug("load_messages: no locale file for '%s'", locale)
        return {}
    with path.open(encoding="utf-8") as fh:
        return _flatten(json.load(fh))


def available_locales() -> list[str]:
    """Return the locale codes that ship a locale file, sorted."""
    return sorted(p.stem for p in LOCALES_DIR.glob("*.json"))


def is_supported(locale: str | None) -> bool:
    """Return ``True`` if *locale* is configured and has a locale file."""
    return bool(locale) and locale in settings.SUPPORTED_LOCALES and locale in available_locales()


def translate(key: str, locale: str | None = None, **params: Any) -> str:
    """Look up *key* for *locale*.

    Falls back to ``settings.DEFAULT_LOCALE`` and finally to the key itself.
    Keyword arguments are substituted into the message with ``str.format``.
    """
    message = load_messages(locale or settings.DEFAULT_LOCALE).get(key)
    if message is None:
        message = load_messages(settings.DEFAULT_LOCALE).get(key)
    if message is None:
        logger.debug("translate: missing key '%s' for locale '%s'", key, locale)
        return key
    return message.format(**params) if params else message

