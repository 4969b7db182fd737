"""Language context shared by the provider clients.

Clients receive a :class:`LanguageContext` at construction time and read it at
call time, so switching the language affects every subsequent request without
rebuilding clients. Independent contexts can be handed to independent client
sets for concurrent multi-locale use.
"""

from __future__ import annotations

import locale
import logging
import os

from .settings import settings

logger = logging.getLogger(__name__)

DEFAULT_LANGUAGE = "en"


def _normalize(code: str) -> str:
    # "fr_FR.UTF-8" / "fr-FR" -> "fr"
    code = code.strip().split(".")[0]
    return code.replace("-", "_").split("_")[0].lower()


def detect_language() -> str:
    """Best-effort language code from settings or the process locale."""
    if settings.language:
        return _normalize(settings.language)

    for var in ("LC_ALL", "LC_MESSAGES", "LANG"):
        value = os.environ.get(var)
        if value and value not in ("C", "POSIX") and not value.startswith("C."):
            return _normalize(value)

    try:
        code, _enc = locale.getlocale()
    except ValueError:
        code = None
    if code and code not in ("C", "POSIX"):
        return _normalize(code)
    return DEFAULT_LANGUAGE


class LanguageContext:
    """Mutable holder for the current Wikipedia language code."""

    def __init__(self, code: str | None = None):
        self._code = _normalize(code) if code else detect_language()

    def get(self) -> str:
        return self._code

    def set(self, code: str) -> None:
        if not code or not code.strip():
            raise ValueError("language code must be non-empty")
        self._code = _normalize(code)
        logger.info("Language set to %s", self._code)

    def __repr__(self) -> str:
        return f"LanguageContext({self._code!r})"


default_context = LanguageContext()


def get_language() -> str:
    return default_context.get()


def set_language(code: str) -> None:
    default_context.set(code)
