from __future__ import annotations
import html
import re
from typing import Any
from markdownify import markdownify as md


def html_to_markdown(html_txt: str) -> str:
    md_txt = md(html_txt, heading_style="ATX", bullets="*")
    return re.sub(r"\n{3,}", "\n\n", md_txt).strip()


def render_content_value(value: Any, no_markdown: bool = False) -> str:
    """One content value as body text, without trailing newline."""
    if isinstance(value, dict):
        if value.get("html") is not None:
            raw = str(value["html"])
            return raw.rstrip("\n") if no_markdown else html_to_markdown(raw)
        value = value.get("value") or ""
    # plain text is never treated as HTML
    return html.escape(str(value), quote=False).rstrip("\n")


def render_body(contents: list, no_markdown: bool = False) -> str:
    parts = [render_content_value(v, no_markdown) + "\n" for v in contents if v is not None]
    return "\n".join(parts)
