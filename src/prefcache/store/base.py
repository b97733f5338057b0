"""Abstract preferences store and the text codec shared by all backends.

A store maps hierarchical paths such as ``/GUI/Theme`` to primitive values.
Backends only move text around; this module turns that text into ``bool``,
``int``, ``float`` or ``str`` and back.
"""

from abc import ABC, abstractmethod
from typing import Optional, TypeVar, Union

from loguru import logger

Primitive = Union[bool, int, float, str]
P = TypeVar("P", bool, int, float, str)

_TRUE_WORDS = frozenset({"1", "true", "yes", "on"})
_FALSE_WORDS = frozenset({"0", "false", "no", "off"})


def encode_value(value: Primitive) -> str:
    """Serialize a primitive to its stored text form.

    Booleans are written as ``"1"``/``"0"``.

    Raises:
        TypeError: If ``value`` is not a supported primitive.
    """
    # bool first: it is a subclass of int
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, (int, float, str)):
        return str(value)
    raise TypeError(f"Unsupported preference type: {type(value).__name__}")


def decode_value(text: str, value_type: type[P]) -> Optional[P]:
    """Parse stored text as ``value_type``.

    Args:
        text: Text as held by the backend.
        value_type: One of ``bool``, ``int``, ``float``, ``str``.

    Returns:
        The parsed value, or None if the text does not parse as that type.
    """
    if value_type is str:
        return text
    stripped = text.strip()
    if value_type is bool:
        word = stripped.lower()
        if word in _TRUE_WORDS:
            return True
        if word in _FALSE_WORDS:
            return False
        return None
    try:
        return value_type(stripped)
    except ValueError:
        return None


class ConfigStore(ABC):
    """Persistent key/value store addressed by path.

    Subclasses implement the three text primitives plus ``flush``. Backend
    failures must be handled inside the primitives: ``_get`` reports them as
    None and ``_put``/``_remove`` as False.
    """

    @abstractmethod
    def _get(self, path: str) -> Optional[str]:
        """Return the stored text at ``path`` or None."""

    @abstractmethod
    def _put(self, path: str, text: str) -> bool:
        """Store ``text`` at ``path``; True if successful."""

    @abstractmethod
    def _remove(self, path: str) -> bool:
        """Remove ``path``; True iff it was present."""

    @abstractmethod
    def flush(self) -> bool:
        """Make pending writes durable; True if successful."""

    def close(self) -> None:
        """Release backend resources."""

    def read(self, path: str, value_type: type[P]) -> Optional[P]:
        """Read a typed value.

        Returns:
            The value, or None when the path is absent or its text does not
            parse as ``value_type``.
        """
        text = self._get(path)
        if text is None:
            return None
        value = decode_value(text, value_type)
        if value is None:
            logger.warning(
                f"Ignoring stored value {text!r} at {path}: not a {value_type.__name__}"
            )
        return value

    def write(self, path: str, value: Primitive) -> bool:
        """Write a typed value. Does not flush."""
        ok = self._put(path, encode_value(value))
        if not ok:
            logger.warning(f"Store write failed for {path}")
        return ok

    def delete_entry(self, path: str) -> bool:
        """Delete the key if present, and return True iff it was."""
        return self._remove(path)

    def has_entry(self, path: str) -> bool:
        return self._get(path) is not None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
