"""
Codec backends for the supported configuration formats.

Each backend lives in its own ``_<name>.py`` module and is imported only
when first requested, so a missing optional library only disables the
format that needs it.
"""

__all__ = ["available_formats", "get_codec", "BaseCodec"]

from importlib.util import find_spec

from cfgkit.errors import FeatureDisabledError
from cfgkit.formats import Format

from .base import BaseCodec

# third-party modules each codec needs besides the standard library
REQUIRED_MODULES: dict[Format, tuple[str, ...]] = {
    Format.JSON: (),
    Format.YAML: ("yaml",),
    Format.TOML: ("tomli_w",),
}


def available_formats() -> frozenset[Format]:
    """Return the formats whose codec libraries are importable."""
    return frozenset(
        fmt
        for fmt, modules in REQUIRED_MODULES.items()
        if all(find_spec(name) is not None for name in modules)
    )


def get_codec(fmt: Format) -> BaseCodec:
    """Create the codec for a format.

    Args:
        fmt: The format to encode and decode.

    Returns:
        BaseCodec: A ready-to-use codec instance.

    Raises:
        FeatureDisabledError: If the library backing the codec is missing.
    """
    try:
        match fmt:
            case Format.JSON:
                from ._json import JsonCodec

                return JsonCodec()
            case Format.YAML:
                from ._yaml import YamlCodec

                return YamlCodec()
            case Format.TOML:
                from ._toml import TomlCodec

                return TomlCodec()
    except ImportError as e:
        raise FeatureDisabledError(fmt) from e
    raise ValueError(f"Unsupported format: {fmt!r}")
