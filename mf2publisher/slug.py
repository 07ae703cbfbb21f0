from __future__ import annotations
import re
from pathlib import PurePosixPath
from bs4 import BeautifulSoup
from unidecode import unidecode

DEFAULT_MAX_WORDS = 5

# compiled patterns carry no match state between calls
_MARKUP_RE = re.compile(r"<[a-zA-Z/!]|&#?\w+;")
_ACRONYM_RE = re.compile(r"([A-Z]+)([A-Z][a-z])")
_CAMEL_RE = re.compile(r"([a-z])([A-Z])")
_NON_ALNUM_RE = re.compile(r"[^a-z0-9]+")
_FILE_NON_ALNUM_RE = re.compile(r"[^a-z0-9.-]+")
_DASHES_RE = re.compile(r"-{2,}")


def clean_text(txt: str) -> str:
    return re.sub(r"\s+", " ", txt).strip()


def strip_html(html: str) -> str:
    """Plain text of an HTML fragment, entities decoded."""
    soup = BeautifulSoup(html, "lxml")
    for tag in soup(["script", "style", "noscript"]):
        tag.decompose()
    return clean_text(soup.get_text(" ", strip=True))


def split_words(text: str) -> str:
    # "CSSFeature" -> "CSS Feature", "FooBar" -> "Foo Bar"
    text = _ACRONYM_RE.sub(r"\1 \2", text)
    return _CAMEL_RE.sub(r"\1 \2", text)


def slugify(text: str, max_words: int | None = DEFAULT_MAX_WORDS) -> str:
    if not text or not text.strip():
        return ""
    if _MARKUP_RE.search(text):
        text = strip_html(text)
    text = split_words(unidecode(text)).lower()
    words = [w for w in _NON_ALNUM_RE.split(text) if w]
    if max_words is not None:
        words = words[:max_words]
    return "-".join(words)


def file_slug(filename: str) -> str:
    """Normalize an attachment basename, keeping its extension."""
    name = PurePosixPath(filename.replace("\\", "/")).name
    stem, dot, ext = name.rpartition(".")
    if not dot or not stem:
        stem, ext = name, ""

    stem = split_words(unidecode(stem)).lower()
    stem = _FILE_NON_ALNUM_RE.sub("-", stem)
    stem = _DASHES_RE.sub("-", stem).strip("-.")
    ext = _NON_ALNUM_RE.sub("", unidecode(ext).lower())

    stem = stem or "file"
    return f"{stem}.{ext}" if ext else stem
