from .config import FormatterConfig, load_config
from .errors import ConfigError, FormatterError, MalformedEntryError
from .formatter import Formatter
from .slug import slugify

__all__ = [
    "ConfigError",
    "Formatter",
    "FormatterConfig",
    "FormatterError",
    "MalformedEntryError",
    "load_config",
    "slugify",
]
