from __future__ import annotations

import json
from typing import TYPE_CHECKING, Union

from .decoders import form_quote, url_quote

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Callable, Iterator
    from typing import Any


def _pairs(data: Any) -> list[tuple[str, Any]]:
    if hasattr(data, "items"):
        data = data.items()
    return [(k, v) for k, v in data]


class TextMap:
    """
    A form whose values are all text.  Accepts a mapping (including a
    :class:`~webform.datastructures.MultiDict`, with every duplicate entry) or
    an iterable of ``(key, value)`` pairs; order is preserved.
    """

    def __init__(self, data: Any = ()) -> None:
        self._items = _pairs(data)

    def __iter__(self) -> Iterator[tuple[str, str]]:
        for key, value in self._items:
            yield key, str(value)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._items!r})"


class StructuredMap:
    """
    A form built from a JSON-like object.  String values are used as they
    are; numbers, booleans, None, lists and objects are written as compact
    JSON.
    """

    def __init__(self, data: Any = ()) -> None:
        self._items = _pairs(data)

    def __iter__(self) -> Iterator[tuple[str, str]]:
        for key, value in self._items:
            if isinstance(value, str):
                yield key, value
            else:
                yield key, json.dumps(value, separators=(",", ":"), ensure_ascii=False)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._items!r})"


FormMap = Union[TextMap, StructuredMap]


def _encode(fields: FormMap, sep: str, quote: Callable[[str], str]) -> str:
    if not isinstance(fields, (TextMap, StructuredMap)):
        raise TypeError("Expected a TextMap or StructuredMap, not %r" % (type(fields).__name__,))
    return sep.join(quote(key) + "=" + quote(value) for key, value in fields)


def encode_urlencoded(fields: FormMap, sep: str = "&") -> str:
    """
    Encodes `fields` as ``application/x-www-form-urlencoded`` text: spaces
    become ``+`` and everything but ``A-Za-z0-9-._~`` is percent-escaped.
    Common separators are ``&`` and ``;``.

    ```python
    encode_urlencoded(TextMap({"spaces": "1 2"}))  # "spaces=1+2"
    ```
    """
    return _encode(fields, sep, form_quote)


def url_encode(fields: FormMap) -> str:
    """
    Encodes `fields` as an RFC 3986 query string: like
    :func:`encode_urlencoded`, but spaces become ``%20`` and the separator is
    always ``&``.
    """
    return _encode(fields, "&", url_quote)
