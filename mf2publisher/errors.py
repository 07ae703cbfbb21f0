class FormatterError(Exception):
    """Base class for everything raised by mf2publisher itself."""


class MalformedEntryError(FormatterError, ValueError):
    """The entry can't be formatted, e.g. it has no ``properties`` dict."""


class ConfigError(FormatterError, ValueError):
    """Invalid formatter configuration."""
