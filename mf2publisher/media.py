from __future__ import annotations
import logging

from .entry import MEDIA_KINDS, properties, published_at
from .permalink import absolute_url
from .slug import file_slug

logger = logging.getLogger(__name__)


def media_dir(entry: dict, slug: str) -> str:
    dt = published_at(entry)
    return f"media/{dt.year:04d}-{dt.month:02d}-{slug}/"


def rename_files(entry: dict, slug: str, relative_to: str | None = None) -> dict:
    """Move attachments under the post's media folder and link them from its properties.

    Mutates ``entry``: ``files`` becomes a flat list of ``{filename, buffer}``
    and each new URL is appended to the matching property (``photo``, ...).
    """
    files = entry.get("files")
    if not isinstance(files, dict):
        return entry

    props = properties(entry)
    folder = media_dir(entry, slug)
    renamed = []
    for kind in MEDIA_KINDS:
        for attachment in files.get(kind) or []:
            target = folder + file_slug(str(attachment.get("filename") or ""))
            logger.debug("renaming %s attachment %r -> %s", kind, attachment.get("filename"), target)
            renamed.append({**attachment, "filename": target})
            existing = props.get(kind)
            if existing is None:
                existing = []
            elif not isinstance(existing, list):
                existing = [existing]
            props[kind] = existing + [absolute_url(relative_to, target)]

    entry["files"] = renamed
    return entry
