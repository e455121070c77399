"""
Mapping from file extensions to configuration formats.
"""

from __future__ import annotations

__all__ = ["Format", "resolve_format"]

from collections.abc import Iterable
from enum import Enum
from pathlib import Path

from cfgkit.errors import FeatureDisabledError, UnsupportedFormatError


class Format(Enum):
    """Supported on-disk encodings.

    Each member carries a display label and the lowercase file extensions
    that select it.
    """

    JSON = ("JSON", (".json",))
    YAML = ("YAML", (".yaml", ".yml"))
    TOML = ("TOML", (".toml",))

    def __init__(self, label: str, extensions: tuple[str, ...]) -> None:
        self.label = label
        self.extensions = extensions

    @classmethod
    def from_extension(cls, ext: str) -> Format | None:
        """Look up the format for a file extension.

        Args:
            ext: Extension with or without the leading dot, any case.

        Returns:
            The matching format, or ``None`` if the extension is unknown.
        """
        ext = ext.lower()
        if ext and not ext.startswith("."):
            ext = "." + ext
        for fmt in cls:
            if ext in fmt.extensions:
                return fmt
        return None


def resolve_format(
    path: str | Path,
    enabled: Iterable[Format] | None = None,
) -> Format:
    """Select the format of a configuration file from its extension.

    Only the suffix is inspected; the file is never opened. Matching is
    case-insensitive.

    Args:
        path: Path of the configuration file.
        enabled: Formats whose codec may be used. Defaults to every format
            whose codec library is installed.

    Returns:
        The resolved format.

    Raises:
        UnsupportedFormatError: If the extension is missing or unknown.
        FeatureDisabledError: If the format is known but not enabled.
    """
    path = Path(path)
    ext = path.suffix
    fmt = Format.from_extension(ext)
    if fmt is None:
        raise UnsupportedFormatError(path, ext)

    if enabled is None:
        from cfgkit.codecs import available_formats

        enabled = available_formats()
    if fmt not in set(enabled):
        raise FeatureDisabledError(fmt, path)

    return fmt
