from __future__ import annotations

import abc
from typing import Any, ClassVar

from cfgkit.formats import Format


class BaseCodec(abc.ABC):
    """Converts between text and plain Python data for one format.

    Codecs only deal in builtin containers and scalars; mapping that data
    onto a user type happens in the config layer. Errors raised by the
    underlying library are left to propagate.
    """

    format: ClassVar[Format]

    @abc.abstractmethod
    def loads(self, text: str) -> Any:
        """Parse a document into plain data.

        Args:
            text: The decoded file contents.

        Returns:
            Any: Dicts, lists and scalars as produced by the library.
        """
        ...

    @abc.abstractmethod
    def dumps(self, data: Any) -> str:
        """Render plain data as a document.

        Args:
            data: Dicts, lists and scalars.

        Returns:
            str: The encoded document.
        """
        ...

    def __repr__(self) -> str:
        return f"<{type(self).__name__} format={self.format.label}>"
