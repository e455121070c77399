"""
Load typed configuration from JSON, YAML or TOML files and save it back.
"""

__all__ = [
    "Config",
    "ConfigBuilder",
    "configure",
    "Format",
    "resolve_format",
    "RWLock",
    "AsyncRWLock",
    "ConfigError",
    "ConfigIOError",
    "UnsupportedFormatError",
    "FeatureDisabledError",
    "DeserializationError",
    "SerializationError",
    "UnboundConfigError",
    "__version__",
]

from .config import Config, ConfigBuilder, configure
from .errors import (
    ConfigError,
    ConfigIOError,
    DeserializationError,
    FeatureDisabledError,
    SerializationError,
    UnboundConfigError,
    UnsupportedFormatError,
)
from .formats import Format, resolve_format
from .locks import AsyncRWLock, RWLock
from .version import __version__ as __version__

__title__ = "cfgkit"
__description__ = "Typed JSON/YAML/TOML configuration files behind a reader/writer lock."
__license__ = "Apache-2.0"
