from __future__ import annotations

from urllib.parse import quote, quote_plus, unquote

# `quote` never escapes ASCII letters, digits and "_.-~", which is exactly the
# RFC 3986 "unreserved" set, so no further character may be marked safe.
SAFE_CHARS = ""


def url_decode(value: str, charset: str = "utf-8") -> str:
    """
    Decodes ``%XX`` escapes in `value`.

    Invalid escapes (a ``%`` not followed by two hex digits) are kept as they
    are instead of raising an error.  The unescaped bytes are decoded with
    `charset`; bytes that are not valid in that charset are replaced.
    """
    if "%" not in value:
        return value
    return unquote(value, encoding=charset, errors="replace")


def form_decode(value: str, charset: str = "utf-8") -> str:
    """
    Like :func:`url_decode`, but a literal ``+`` stands for a space, as in
    ``application/x-www-form-urlencoded`` bodies.
    """
    return url_decode(value.replace("+", " "), charset)


def url_quote(value: str) -> str:
    """Escapes everything but unreserved characters; a space becomes ``%20``."""
    return quote(value, safe=SAFE_CHARS, encoding="utf-8")


def form_quote(value: str) -> str:
    """Escapes everything but unreserved characters; a space becomes ``+``."""
    return quote_plus(value, safe=SAFE_CHARS, encoding="utf-8")
