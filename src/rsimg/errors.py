"""
Error types raised by rsimg.

Everything here is fatal to a run; cli.main is the only place that catches them.
"""


class RsimgError(Exception):
    """Base class for expected rsimg failures."""


class ConfigError(RsimgError, ValueError):
    """The options string or task name cannot be turned into a resize config."""


class MalformedOptionError(ConfigError):
    def __init__(self, option: str):
        super().__init__(f"Invalid option: {option!r} (expected key=value)")
        self.option = option


class MissingOptionError(ConfigError):
    def __init__(self, name: str):
        super().__init__(f"Missing required option: {name}")
        self.name = name


class InvalidSizeError(ConfigError):
    def __init__(self, value: str, reason: str):
        super().__init__(f"Invalid size {value!r}: {reason}")
        self.value = value


class PathError(RsimgError, NotADirectoryError):
    """The source path is not a directory."""


class ImageIoError(RsimgError, RuntimeError):
    """Decoding, resampling or writing a single image failed."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"{path}: {reason}")
        self.path = path
