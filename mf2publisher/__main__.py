from __future__ import annotations
import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from .config import load_config
from .errors import FormatterError
from .formatter import Formatter


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="mf2publisher",
        description="Format a micropub h-entry (JSON) as a Jekyll post.",
    )
    parser.add_argument("entry", help="path to the h-entry JSON document, '-' for stdin")
    parser.add_argument("--config", help="YAML config file (formatter: section or top level)")
    parser.add_argument("--relative-to", help="base URL for absolute permalinks")
    parser.add_argument("--json", action="store_true", help="print a JSON summary instead of the document")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser.parse_args(argv)


def read_entry(source: str) -> dict:
    text = sys.stdin.read() if source == "-" else Path(source).read_text(encoding="utf-8")
    entry = json.loads(text)
    # buffers can't travel in JSON
    entry.pop("files", None)
    return entry


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        cfg = load_config(args.config)
        entry = read_entry(args.entry)
        result = asyncio.run(Formatter(cfg).format_all(entry, args.relative_to))
    except (OSError, json.JSONDecodeError, FormatterError) as e:
        print(f">> Failed: {e}", file=sys.stderr, flush=True)
        return 1

    if args.json:
        summary = {k: result[k] for k in ("filename", "url", "content")}
        print(json.dumps(summary, ensure_ascii=False, indent=2))
        return 0

    print(f">> File: {result['filename']}", flush=True)
    print(f">> URL: {result['url']}", flush=True)
    print(result["content"], end="")
    return 0


if __name__ == "__main__":
    sys.exit(main())
