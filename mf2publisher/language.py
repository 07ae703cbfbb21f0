from __future__ import annotations
import logging
from typing import Iterable, Optional, Protocol
from lingua import IsoCode639_3, Language, LanguageDetectorBuilder

from .errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_MIN_RELATIVE_DISTANCE = 0.1


class Detector(Protocol):
    def detect(self, text: str) -> Optional[str]: ...


def _language(code: str) -> Optional[Language]:
    code = (code or "").strip()
    if len(code) != 3 or not code.isalpha():
        return None
    iso = getattr(IsoCode639_3, code.upper(), None)
    if iso is None:
        return None
    return Language.from_iso_code_639_3(iso)


def to_iso639_1(code: str) -> str:
    """``"eng"`` -> ``"en"``; anything not a known ISO 639-3 code is returned as is."""
    language = _language(code)
    if language is None:
        return code
    return language.iso_code_639_1.name.lower()


class LanguageDetector:
    """Text -> ISO 639-3 code, or None when no language is a confident match."""

    def __init__(self, allowed: Iterable[str] | None = None,
                 min_relative_distance: float = DEFAULT_MIN_RELATIVE_DISTANCE):
        if allowed is None:
            builder = LanguageDetectorBuilder.from_all_languages()
        else:
            languages = []
            for code in allowed:
                language = _language(str(code))
                if language is None:
                    raise ConfigError(f"unknown ISO 639-3 language code: {code!r}")
                languages.append(language)
            if len(languages) < 2:
                raise ConfigError("language detection needs at least two allowed languages")
            builder = LanguageDetectorBuilder.from_languages(*languages)
        self._detector = builder.with_minimum_relative_distance(min_relative_distance).build()

    def detect(self, text: str) -> Optional[str]:
        if not text or not text.strip():
            return None
        language = self._detector.detect_language_of(text)
        if language is None:
            logger.debug("no confident language for %d chars of text", len(text))
            return None
        return language.iso_code_639_3.name.lower()
