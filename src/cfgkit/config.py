"""
Typed configuration container backed by a JSON, YAML or TOML file.

A :class:`Config` owns one value of a user-defined shape (a dataclass, a
pydantic model, a ``TypedDict`` ...) behind a reader/writer lock, together
with the file it came from and that file's format::

    @dataclass
    class AppConfig:
        name: str = ""
        age: int = 0

    cfg = Config.configure(AppConfig).load("config.toml")

    with cfg.get().write() as data:
        data.age += 1

    cfg.save()

Conversion between the codec's plain data and the shape is done by
pydantic's ``TypeAdapter``, so anything it can validate and dump can be
used as a shape.
"""

from __future__ import annotations

__all__ = ["Config", "ConfigBuilder", "configure"]

import asyncio
import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, Generic, TypeVar

from pydantic import TypeAdapter

from cfgkit.codecs import BaseCodec, available_formats, get_codec
from cfgkit.errors import (
    ConfigIOError,
    DeserializationError,
    FeatureDisabledError,
    SerializationError,
    UnboundConfigError,
)
from cfgkit.formats import Format, resolve_format
from cfgkit.locks import AsyncRWLock, RWLock

logger = logging.getLogger(__name__)

T = TypeVar("T")


@lru_cache(maxsize=128)
def _adapter(shape: Any) -> TypeAdapter[Any]:
    return TypeAdapter(shape)


def _codec_for(fmt: Format, path: Path) -> BaseCodec:
    try:
        return get_codec(fmt)
    except FeatureDisabledError as e:
        raise FeatureDisabledError(fmt, path) from e.__cause__


def _read_value(path: Path, fmt: Format, shape: Any) -> Any:
    """Read, parse and validate a config file.

    Raises:
        ConfigIOError: If the file cannot be read.
        DeserializationError: If the bytes are not valid UTF-8, fail to
            parse, or do not match ``shape``.
    """
    codec = _codec_for(fmt, path)
    try:
        raw = path.read_bytes()
    except OSError as e:
        raise ConfigIOError(path, e) from e

    try:
        data = codec.loads(raw.decode("utf-8"))
        return _adapter(shape).validate_python(data)
    except Exception as e:
        raise DeserializationError(path, fmt, e) from e


def _encode_value(value: Any, path: Path, fmt: Format, shape: Any) -> str:
    codec = _codec_for(fmt, path)
    try:
        data = _adapter(shape).dump_python(value, mode="json", warnings="error")
        return codec.dumps(data)
    except Exception as e:
        raise SerializationError(path, fmt, e) from e


def _write_text(path: Path, text: str) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    except OSError as e:
        logger.error("Failed to write config '%s': %s", path, e)
        raise ConfigIOError(path, e) from e


class Config(Generic[T]):
    """A configuration value bound to the file it is persisted in.

    Instances are created by :meth:`configure` (then
    :meth:`ConfigBuilder.load`), :meth:`from_value` or :meth:`empty`. The
    path and format are fixed at construction. The value itself is only
    reachable through the lock returned by :meth:`get`.
    """

    def __init__(
        self,
        lock: RWLock[T] | AsyncRWLock[T],
        shape: Any,
        path: Path | None = None,
        fmt: Format | None = None,
    ) -> None:
        self._lock = lock
        self._shape = shape
        self._path = path
        self._format = fmt

    @staticmethod
    def configure(shape: type[T]) -> ConfigBuilder[T]:
        """Start building a config of the given shape.

        Args:
            shape: The type the file contents are validated into.

        Returns:
            ConfigBuilder: A builder; call :meth:`ConfigBuilder.load` on it.
        """
        return ConfigBuilder(shape)

    @classmethod
    def empty(cls, shape: type[T]) -> Config[T]:
        """Create an unbound config holding ``shape()``.

        Such a config can be read and written through its lock, but
        :meth:`save` raises :class:`UnboundConfigError`.
        """
        logger.debug("Created unbound config with default %s", shape)
        return cls(RWLock(shape()), shape)

    @classmethod
    def from_value(
        cls,
        value: T,
        path: str | Path,
        shape: Any = None,
    ) -> Config[T]:
        """Bind an in-memory value to a file without reading it.

        Args:
            value: The initial value.
            path: Where :meth:`save` writes; its extension selects the format.
            shape: The value's type. Defaults to ``type(value)``.

        Raises:
            UnsupportedFormatError: If the extension is unknown.
            FeatureDisabledError: If the format's codec is unavailable.
        """
        path = Path(path)
        fmt = resolve_format(path)
        return cls(RWLock(value), shape if shape is not None else type(value), path, fmt)

    @property
    def path(self) -> Path | None:
        return self._path

    @property
    def format(self) -> Format | None:
        return self._format

    @property
    def shape(self) -> Any:
        return self._shape

    @property
    def is_bound(self) -> bool:
        """Whether the config has a file to save to."""
        return self._path is not None

    def get(self) -> RWLock[T] | AsyncRWLock[T]:
        """Return the lock guarding the value.

        The lock is the shared handle itself, not a copy: use
        ``get().read()`` for a shared view and ``get().write()`` for an
        exclusive one.
        """
        return self._lock

    def _bound(self) -> tuple[Path, Format]:
        if self._path is None or self._format is None:
            raise UnboundConfigError()
        return self._path, self._format

    def save(self) -> None:
        """Write the current value back to its file, replacing its contents.

        A read view is held while the value is encoded and released before
        the file is written. This blocks while another thread holds the
        write view. Calling it inside this thread's own ``read()`` block is
        allowed; inside its own ``write()`` block it raises ``RuntimeError``.

        Raises:
            UnboundConfigError: If the config has no path.
            SerializationError: If the value cannot be encoded.
            ConfigIOError: If the file cannot be written.
            TypeError: If the config uses an :class:`AsyncRWLock`; use
                :meth:`asave` instead.
        """
        path, fmt = self._bound()
        if isinstance(self._lock, AsyncRWLock):
            raise TypeError("Config uses an AsyncRWLock; await asave() instead.")

        logger.debug("Saving %s config to: %s", fmt.label, path)
        with self._lock.read() as value:
            text = _encode_value(value, path, fmt, self._shape)
        _write_text(path, text)
        logger.info("Configuration saved to %s: %s", fmt.label, path)

    async def asave(self) -> None:
        """Coroutine version of :meth:`save`.

        Works with either lock type; the file is written in a worker thread
        so the event loop is not blocked. With an :class:`RWLock` that the
        calling thread already holds, the save runs inline instead, since a
        worker thread could never get past this thread's own view. As with
        :meth:`save`, that raises ``RuntimeError`` for a held write view.
        """
        path, fmt = self._bound()
        if isinstance(self._lock, RWLock):
            if self._lock.held_by_current_thread():
                self.save()
            else:
                await asyncio.to_thread(self.save)
            return

        logger.debug("Saving %s config to: %s", fmt.label, path)
        async with self._lock.read() as value:
            text = _encode_value(value, path, fmt, self._shape)
        await asyncio.to_thread(_write_text, path, text)
        logger.info("Configuration saved to %s: %s", fmt.label, path)

    def __repr__(self) -> str:
        fmt = self._format.label if self._format else None
        return f"<Config shape={self._shape!r} path={self._path} format={fmt}>"


class ConfigBuilder(Generic[T]):
    """Collects loading options, then loads a file with :meth:`load`.

    Option methods return the builder, so calls can be chained::

        Config.configure(AppConfig).use_default_on_error().load(path)
    """

    def __init__(self, shape: type[T]) -> None:
        self._shape = shape
        self._use_default_on_error = False
        self._formats: frozenset[Format] | None = None
        self._async_lock = False

    def use_default_on_error(self) -> ConfigBuilder[T]:
        """Fall back to ``shape()`` when the file cannot be read or parsed.

        The returned config is still bound to the requested path, so a
        later :meth:`Config.save` creates the file.

        Only read and parse failures (:class:`ConfigIOError`,
        :class:`DeserializationError`) are replaced. An unknown or disabled
        extension still raises :class:`UnsupportedFormatError` or
        :class:`FeatureDisabledError`, because a config without a resolved
        format could never be saved.
        """
        self._use_default_on_error = True
        return self

    def formats(self, *formats: Format) -> ConfigBuilder[T]:
        """Restrict loading to the given formats.

        Files of any other known format fail with
        :class:`FeatureDisabledError`, exactly as if its codec were missing.
        """
        self._formats = frozenset(formats)
        return self

    def use_async_lock(self) -> ConfigBuilder[T]:
        """Guard the value with an :class:`AsyncRWLock` for asyncio callers."""
        self._async_lock = True
        return self

    def enabled_formats(self) -> frozenset[Format]:
        """Return the installed formats, narrowed by :meth:`formats` if set."""
        enabled = available_formats()
        if self._formats is not None:
            enabled &= self._formats
        return enabled

    def load(self, path: str | Path) -> Config[T]:
        """Read a config file into a new :class:`Config`.

        The extension selects the format, the contents are parsed with that
        format's codec and validated into the builder's shape.

        Args:
            path: The config file.

        Returns:
            Config: A config bound to ``path``.

        Raises:
            UnsupportedFormatError: If the extension is unknown.
            FeatureDisabledError: If the format is not enabled or installed.
            ConfigIOError: If the file cannot be read.
            DeserializationError: If the contents do not parse into the shape.
        """
        path = Path(path)
        fmt = resolve_format(path, self.enabled_formats())

        logger.debug("Loading %s config from: %s", fmt.label, path)
        try:
            value = _read_value(path, fmt, self._shape)
        except (ConfigIOError, DeserializationError) as e:
            if not self._use_default_on_error:
                raise
            logger.warning("Using default config because loading failed: %s", e)
            value = self._shape()
        else:
            logger.debug("Loaded %s config from: %s", fmt.label, path)

        lock = AsyncRWLock(value) if self._async_lock else RWLock(value)
        return Config(lock, self._shape, path, fmt)


def configure(shape: type[T]) -> ConfigBuilder[T]:
    """Shorthand for :meth:`Config.configure`."""
    return ConfigBuilder(shape)
