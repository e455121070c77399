from __future__ import annotations

import json
from typing import Any

from cfgkit.formats import Format

from .base import BaseCodec


class JsonCodec(BaseCodec):
    format = Format.JSON

    def loads(self, text: str) -> Any:
        return json.loads(text)

    def dumps(self, data: Any) -> str:
        return json.dumps(data, indent=2, ensure_ascii=False) + "\n"
