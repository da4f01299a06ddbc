"""Exceptions for bitx-config."""


class ConfigError(Exception):
    """Base exception for configuration errors."""

    pass


class ConfigFileError(ConfigError):
    """Error parsing a configuration document."""

    pass


class SearchError(ConfigError):
    """The file-search tool is unavailable, timed out, or failed."""

    pass
