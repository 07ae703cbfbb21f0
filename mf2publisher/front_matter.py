from __future__ import annotations
import datetime
import yaml

from .entry import first, iso_timestamp, published_at, values

LAYOUT = "micropubpost"

# properties with a dedicated front matter key, or never exposed at all
CONSUMED = frozenset({"name", "published", "slug", "category", "lang", "content", "url"})


class FrontMatterDumper(yaml.SafeDumper):
    """Block style YAML with indented sequences and quoted URL-ish strings."""

    def increase_indent(self, flow=False, indentless=False):
        return super().increase_indent(flow, False)


def _represent_str(dumper: yaml.SafeDumper, data: str):
    if ":" in data or "#" in data:
        return dumper.represent_scalar("tag:yaml.org,2002:str", data, style="'")
    return dumper.represent_str(data)


FrontMatterDumper.add_representer(str, _represent_str)


def _plain(value):
    if isinstance(value, datetime.datetime):
        return iso_timestamp(value)
    if isinstance(value, dict):
        return {str(k): _plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    if isinstance(value, (bytes, bytearray)):
        return value.decode("utf-8", errors="replace")
    return value


def build_front_matter_dict(entry: dict) -> dict:
    derived = entry.get("derived") or {}

    fm = {
        "layout": LAYOUT,
        "date": iso_timestamp(published_at(entry)),
        "title": str(first(entry, "name") or ""),
    }

    slug = first(entry, "slug")
    if slug:
        fm["slug"] = str(slug)

    tags = [str(t) for t in values(entry, "category") if t]
    if tags:
        fm["tags"] = " ".join(tags)

    lang = first(entry, "lang")
    if lang:
        fm["lang"] = str(lang)

    if derived.get("category"):
        fm["category"] = str(derived["category"])

    person_tags = [str(t) for t in derived.get("personTags") or []]
    if person_tags:
        fm["persontags"] = person_tags

    # insertion order of the property bag is kept
    for name, found in entry["properties"].items():
        if name in CONSUMED:
            continue
        found = values(entry, name)
        if not found:
            continue
        fm[f"mf-{name}"] = _plain(found)

    return fm


def front_matter_text(fm_dict: dict) -> str:
    yaml_txt = yaml.dump(
        fm_dict,
        Dumper=FrontMatterDumper,
        allow_unicode=True,
        sort_keys=False,
        default_flow_style=False,
        width=1000,
    )
    return f"---\n{yaml_txt}---\n"
