from __future__ import annotations
import re
from urllib.parse import urljoin

from .entry import first, published_at

DEFAULT_PERMALINK_STYLE = ":year/:month/:day/:slug.html"
DEFAULT_FILEPATH = "_posts/:year-:month-:day-:slug"

_TOKEN_RE = re.compile(r":([A-Za-z_]+)")
_SLASHES_RE = re.compile(r"(?<!:)/{2,}")


def default_filepath(no_markdown: bool = False) -> str:
    return DEFAULT_FILEPATH + (".html" if no_markdown else ".md")


def template_fields(entry: dict, slug: str | None = None) -> dict[str, str]:
    """Values for every token a path template may use."""
    if slug is None:
        slug = first(entry, "slug") or ""
    dt = published_at(entry)
    derived = entry.get("derived") or {}
    return {
        "year": f"{dt.year:04d}",
        "month": f"{dt.month:02d}",
        "day": f"{dt.day:02d}",
        "title": slug,
        "slug": slug,
        "categories": derived.get("category") or "",
    }


def expand(template: str, entry: dict, slug: str | None = None) -> str:
    fields = template_fields(entry, slug)

    def _sub(m: re.Match) -> str:
        # unknown tokens stay as written
        return fields.get(m.group(1), m.group(0))

    return _SLASHES_RE.sub("/", _TOKEN_RE.sub(_sub, template))


def relative_path(template: str, entry: dict, slug: str | None = None) -> str:
    return expand(template, entry, slug).lstrip("/")


def absolute_url(base_url: str | None, path: str) -> str:
    if not base_url:
        return path
    if not base_url.endswith("/"):
        base_url += "/"
    return urljoin(base_url, path.lstrip("/"))
