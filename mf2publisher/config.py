from __future__ import annotations
import os
import re
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Callable, Mapping, Union
import yaml
from dotenv import load_dotenv

from .errors import ConfigError

ENV_OVERRIDES = {
    "MF2_RELATIVE_TO": "relative_to",
    "MF2_PERMALINK_STYLE": "permalink_style",
    "MF2_FILEPATH": "filepath",
}

CategoryRule = Union[bool, Callable[[dict], Union[str, None]]]


@dataclass(frozen=True)
class FormatterConfig:
    permalink_style: str | None = None
    filepath: str | None = None
    no_markdown: bool = False
    content_slug: bool = False
    derive_category: CategoryRule = True
    derive_languages: bool | list[str] = False
    defaults: dict = field(default_factory=dict)
    relative_to: str | None = None

    def __post_init__(self):
        for name in ("permalink_style", "filepath", "relative_to"):
            value = getattr(self, name)
            if value is not None and not isinstance(value, str):
                raise ConfigError(f"{name} must be a string, got {type(value).__name__}")
        if not (isinstance(self.derive_category, bool) or callable(self.derive_category)):
            raise ConfigError("derive_category must be a bool or a callable")
        langs = self.derive_languages
        if not isinstance(langs, bool):
            if isinstance(langs, str) or not all(isinstance(c, str) for c in langs):
                raise ConfigError("derive_languages must be a bool or a list of ISO 639-3 codes")
            object.__setattr__(self, "derive_languages", list(langs))
        if not isinstance(self.defaults, Mapping):
            raise ConfigError("defaults must be a mapping")

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any] | None) -> "FormatterConfig":
        """Build from snake_case or camelCase keys (``noMarkdown``, ``relativeTo``...)."""
        known = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in (mapping or {}).items():
            name = _snake(str(key))
            if name not in known:
                raise ConfigError(f"unknown formatter option: {key!r}")
            kwargs[name] = value
        return cls(**kwargs)


def _snake(key: str) -> str:
    return re.sub(r"(?<!^)(?=[A-Z])", "_", key).lower()


def load_config(path: str | Path | None = None, env: Mapping[str, str] | None = None) -> FormatterConfig:
    """Formatter config from an optional YAML file plus ``MF2_*`` environment overrides."""
    load_dotenv()
    env = os.environ if env is None else env

    data: dict = {}
    if path is not None:
        try:
            loaded = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"can't read config {path}: {e}") from e
        if not isinstance(loaded, dict):
            raise ConfigError(f"config {path} must be a mapping")
        section = loaded["formatter"] if "formatter" in loaded else loaded
        if section is not None and not isinstance(section, dict):
            raise ConfigError(f"'formatter' section of {path} must be a mapping")
        data = dict(section or {})

    for var, name in ENV_OVERRIDES.items():
        if env.get(var):
            data[name] = env[var]

    return FormatterConfig.from_mapping(data)
