from __future__ import annotations
import asyncio
import copy
import dataclasses
import datetime
import logging
from typing import Any, Callable, Mapping

from .config import FormatterConfig
from .content import render_body
from .entry import (entry_text, first, has_value, is_url, properties,
                    published_at, values)
from .front_matter import build_front_matter_dict, front_matter_text
from .language import Detector, LanguageDetector, to_iso639_1
from .media import rename_files
from .permalink import DEFAULT_PERMALINK_STYLE, absolute_url, default_filepath, relative_path
from .slug import file_slug, slugify

logger = logging.getLogger(__name__)

SOCIAL_PROPERTIES = ("in-reply-to", "like-of")
LINK_PROPERTIES = ("bookmark", "bookmark-of", "repost-of")


def _utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


def _is_empty(value: Any) -> bool:
    return value is None or value == "" or (isinstance(value, (list, tuple, dict)) and not value)


def copy_entry(entry: dict) -> dict:
    """Deep copy of an entry; attachments get new dicts but keep their buffer objects."""
    copied = copy.deepcopy({k: v for k, v in entry.items() if k != "files"})
    files = entry.get("files")
    if isinstance(files, dict):
        copied["files"] = {kind: [dict(a) for a in items or []] for kind, items in files.items()}
    elif isinstance(files, list):
        copied["files"] = [dict(a) for a in files]
    elif files is not None:
        copied["files"] = files
    return copied


def fallback_slug(published: datetime.datetime) -> str:
    """Seconds since midnight UTC of the publish time, e.g. 14:34:01 -> "52441"."""
    return str(published.hour * 3600 + published.minute * 60 + published.second)


def derive_category(entry: dict) -> str | None:
    if any(has_value(entry, p) for p in SOCIAL_PROPERTIES):
        return "social"
    if any(has_value(entry, p) for p in LINK_PROPERTIES):
        return "links"
    if not has_value(entry, "name") and not has_value(entry, "slug"):
        return "social"
    return None


class Formatter:
    """Turns micropub h-entries into Jekyll posts.

    Path and URL operations accept a raw entry and pre-format a copy of it
    first; entries flagged ``preFormatted`` are used as they are. ``format``
    renders whatever it is given.
    """

    def __init__(self, config: FormatterConfig | None = None, *,
                 language_detector: Detector | None = None,
                 clock: Callable[[], datetime.datetime] | None = None):
        self.config = config or FormatterConfig()
        self._clock = clock or _utcnow
        if language_detector is None and self.config.derive_languages:
            allowed = None if self.config.derive_languages is True else self.config.derive_languages
            language_detector = LanguageDetector(allowed)
        self._language_detector = language_detector

    @classmethod
    def relative_to_url(cls, url: str, **kwargs) -> "Formatter":
        return cls(FormatterConfig(relative_to=url), **kwargs)

    @classmethod
    def from_options(cls, options: Mapping[str, Any] | None = None, **kwargs) -> "Formatter":
        return cls(FormatterConfig.from_mapping(options), **kwargs)

    def _with_relative_to(self, url: str) -> "Formatter":
        return Formatter(dataclasses.replace(self.config, relative_to=url),
                         language_detector=self._language_detector, clock=self._clock)

    # -- slugs

    def _format_slug(self, entry: dict) -> str:
        name = first(entry, "name")
        slug = slugify(str(name)) if name else ""
        if not slug and self.config.content_slug:
            slug = slugify(entry_text(entry))
        if not slug:
            slug = fallback_slug(published_at(entry))
        return slug

    def _entry_slug(self, entry: dict) -> str:
        return first(entry, "slug") or self._format_slug(entry)

    def _format_files_slug(self, kind: str, attachment: dict) -> str:
        return file_slug(str(attachment.get("filename") or ""))

    # -- pre-formatting

    def _ensure_published(self, entry: dict):
        if not has_value(entry, "published"):
            entry["properties"]["published"] = [self._clock()]

    def _pre_format_files(self, entry: dict) -> dict:
        if not isinstance(entry.get("files"), dict):
            return entry
        self._ensure_published(entry)
        return rename_files(entry, self._entry_slug(entry), self.config.relative_to)

    async def pre_format_files(self, entry: dict) -> dict:
        properties(entry)
        return self._pre_format_files(copy_entry(entry))

    def _derive_category(self, entry: dict) -> str | None:
        rule = self.config.derive_category
        if rule is False:
            return None
        if callable(rule):
            return rule(entry)
        return derive_category(entry)

    def _extract_person_tags(self, entry: dict, derived: dict):
        tags = values(entry, "category")
        person_tags = [t for t in tags if is_url(t)]
        if not person_tags:
            return
        derived["personTags"] = list(derived.get("personTags") or []) + person_tags
        rest = [t for t in tags if not is_url(t)]
        if rest:
            entry["properties"]["category"] = rest
        else:
            del entry["properties"]["category"]

    async def _derive_language(self, entry: dict):
        props = entry["properties"]
        if has_value(entry, "lang"):
            langs = values(entry, "lang")
            props["lang"] = [to_iso639_1(str(langs[0]))] + langs[1:]
            return
        text = entry_text(entry)
        if not text or self._language_detector is None:
            return
        code = await asyncio.to_thread(self._language_detector.detect, text)
        if code:
            props["lang"] = [to_iso639_1(code)]

    def _apply_defaults(self, entry: dict):
        for section, defaults in self.config.defaults.items():
            if not isinstance(defaults, Mapping):
                if _is_empty(entry.get(section)):
                    entry[section] = copy.deepcopy(defaults)
                continue
            target = entry.get(section)
            if not isinstance(target, dict):
                target = entry[section] = {}
            for key, value in defaults.items():
                if _is_empty(target.get(key)):
                    target[key] = copy.deepcopy(value)

    async def pre_format(self, entry: dict) -> dict:
        if isinstance(entry, dict) and entry.get("preFormatted"):
            return entry

        properties(entry)
        entry = copy_entry(entry)
        props = entry["properties"]
        derived = entry["derived"] = dict(entry.get("derived") or {})

        self._ensure_published(entry)
        self._pre_format_files(entry)

        if not derived.get("category"):
            category = self._derive_category(entry)
            if category:
                derived["category"] = category

        self._extract_person_tags(entry, derived)

        if props.get("slug") is None:
            props["slug"] = [self._format_slug(entry)]

        if self.config.derive_languages:
            await self._derive_language(entry)

        self._apply_defaults(entry)
        entry["preFormatted"] = True
        logger.debug("pre-formatted entry slug=%s category=%s lang=%s",
                     first(entry, "slug"), derived.get("category"), first(entry, "lang"))
        return entry

    # -- output

    async def format(self, entry: dict) -> str:
        """Renders the entry as given; nothing is derived for raw entries."""
        if not entry.get("preFormatted"):
            props = properties(entry)
            if not has_value(entry, "published"):
                entry = {**entry, "properties": {**props, "published": [self._clock()]}}
        body = render_body(values(entry, "content"), self.config.no_markdown)
        return front_matter_text(build_front_matter_dict(entry)) + body

    async def format_filename(self, entry: dict) -> str:
        entry = await self.pre_format(entry)
        template = self.config.filepath or default_filepath(self.config.no_markdown)
        return relative_path(template, entry, self._entry_slug(entry))

    async def format_url(self, entry: dict) -> str:
        entry = await self.pre_format(entry)
        template = self.config.permalink_style or DEFAULT_PERMALINK_STYLE
        return absolute_url(self.config.relative_to, relative_path(template, entry, self._entry_slug(entry)))

    async def format_all(self, entry: dict, relative_to: str | None = None) -> dict:
        formatter = self
        if relative_to is not None and relative_to != self.config.relative_to:
            formatter = self._with_relative_to(relative_to)

        entry = await formatter.pre_format(entry)
        result = {
            "filename": await formatter.format_filename(entry),
            "url": await formatter.format_url(entry),
            "content": await formatter.format(entry),
            "files": list(entry.get("files") or []),
            "raw": entry,
        }
        logger.info("formatted %s -> %s", result["filename"], result["url"])
        return result
