"""
Exception hierarchy for loading and saving configuration files.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cfgkit.formats import Format


class ConfigError(Exception):
    """Base class for every error raised by cfgkit.

    Attributes:
        path: The configuration file involved, if any.
    """

    def __init__(self, message: str, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path


class ConfigIOError(ConfigError):
    """Reading or writing the configuration file failed at the OS level."""

    def __init__(self, path: Path, error: OSError) -> None:
        super().__init__(f"I/O error on {path}: {error}", path)
        self.error = error


class UnsupportedFormatError(ConfigError):
    """The file extension does not map to any known format."""

    def __init__(self, path: Path, extension: str) -> None:
        shown = extension or "<none>"
        super().__init__(f"Unsupported config file extension {shown!r}: {path}", path)
        self.extension = extension


class FeatureDisabledError(ConfigError):
    """The format is known but its codec is not available."""

    def __init__(self, fmt: Format, path: Path | None = None) -> None:
        where = f": {path}" if path is not None else ""
        super().__init__(f"{fmt.label} support is not enabled{where}", path)
        self.format = fmt


class DeserializationError(ConfigError):
    """The file contents do not parse into the target shape."""

    def __init__(self, path: Path, fmt: Format, detail: object) -> None:
        super().__init__(f"Invalid {fmt.label} in {path}: {detail}", path)
        self.format = fmt


class SerializationError(ConfigError):
    """The in-memory value cannot be encoded in the stored format."""

    def __init__(self, path: Path, fmt: Format, detail: object) -> None:
        super().__init__(f"Cannot encode config as {fmt.label} for {path}: {detail}", path)
        self.format = fmt


class UnboundConfigError(ConfigError):
    """The config has no file to save to."""

    def __init__(self) -> None:
        super().__init__("Config is not bound to a file; nothing to save to.")
