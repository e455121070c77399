from __future__ import annotations

from typing import Any

import yaml

from cfgkit.formats import Format

from .base import BaseCodec


class YamlCodec(BaseCodec):
    format = Format.YAML

    def loads(self, text: str) -> Any:
        data = yaml.safe_load(text)
        # an empty document loads as None
        return {} if data is None else data

    def dumps(self, data: Any) -> str:
        return yaml.safe_dump(
            data,
            allow_unicode=True,
            sort_keys=False,
            default_flow_style=False,
        )
