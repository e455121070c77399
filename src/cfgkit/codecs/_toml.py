from __future__ import annotations

import tomllib
from collections.abc import Mapping
from typing import Any

import tomli_w

from cfgkit.formats import Format

from .base import BaseCodec


class TomlCodec(BaseCodec):
    """TOML codec: stdlib ``tomllib`` for reading, ``tomli-w`` for writing."""

    format = Format.TOML

    def loads(self, text: str) -> Any:
        return tomllib.loads(text)

    def dumps(self, data: Any) -> str:
        if not isinstance(data, Mapping):
            raise TypeError(
                f"TOML documents must be a table at the top level, got {type(data).__name__}"
            )
        return tomli_w.dumps(data)
