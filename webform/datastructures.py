from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Iterator
    from typing import Any


class MultiDict:
    """
    An ordered dictionary that can hold multiple values for the same key.

    Every call to :meth:`append` adds a new entry; nothing is ever
    overwritten.  Entries keep their insertion order across keys, so
    ``list(d.items())`` gives back exactly what was appended, in order.

    Item access (``d[key]``, :meth:`get`) returns the *first* value stored for
    a key; use :meth:`getall` to get every value.  ``len(d)`` counts entries,
    not distinct keys.
    """

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        self._items: list[tuple[Any, Any]] = []
        for arg in args:
            if hasattr(arg, "items"):
                arg = arg.items()
            for k, v in arg:
                self.append(k, v)
        for k, v in kwargs.items():
            self.append(k, v)

    def _normalize(self, key: Any) -> Any:
        return key

    def append(self, key: Any, value: Any) -> None:
        self._items.append((key, value))

    def replace(self, key: Any, value: Any) -> None:
        """Drop every entry for `key` and store `value` in place of the first."""
        norm = self._normalize(key)
        new_items = []
        replaced = False
        for k, v in self._items:
            if self._normalize(k) == norm:
                if not replaced:
                    new_items.append((key, value))
                    replaced = True
            else:
                new_items.append((k, v))
        if not replaced:
            new_items.append((key, value))
        self._items = new_items

    def getall(self, key: Any) -> list[Any]:
        norm = self._normalize(key)
        return [v for k, v in self._items if self._normalize(k) == norm]

    def get(self, key: Any, default: Any = None) -> Any:
        norm = self._normalize(key)
        for k, v in self._items:
            if self._normalize(k) == norm:
                return v
        return default

    def keys(self) -> list[Any]:
        return [k for k, _ in self._items]

    def values(self) -> list[Any]:
        return [v for _, v in self._items]

    def items(self) -> list[tuple[Any, Any]]:
        return list(self._items)

    def __getitem__(self, key: Any) -> Any:
        norm = self._normalize(key)
        for k, v in self._items:
            if self._normalize(k) == norm:
                return v
        raise KeyError(key)

    def __setitem__(self, key: Any, value: Any) -> None:
        self.append(key, value)

    def __delitem__(self, key: Any) -> None:
        norm = self._normalize(key)
        remaining = [(k, v) for k, v in self._items if self._normalize(k) != norm]
        if len(remaining) == len(self._items):
            raise KeyError(key)
        self._items = remaining

    def __contains__(self, key: object) -> bool:
        norm = self._normalize(key)
        return any(self._normalize(k) == norm for k, _ in self._items)

    def __iter__(self) -> Iterator[Any]:
        return iter(self.keys())

    def __len__(self) -> int:
        return len(self._items)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, MultiDict):
            return self._items == other._items
        return NotImplemented

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._items!r})"


class Headers(MultiDict):
    """
    The header lines of a single multipart part.  Header names are matched
    case-insensitively but keep the spelling they were sent with.
    """

    def _normalize(self, key: Any) -> Any:
        if isinstance(key, str):
            return key.lower()
        return key
