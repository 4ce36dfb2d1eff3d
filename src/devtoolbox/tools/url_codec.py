"""URL percent-encoding.

Everything outside the RFC 3986 unreserved set (``A-Z a-z 0-9 - _ . ~``) is
encoded, including ``/`` and spaces.  Decoding leaves ``+`` untouched.
"""

from __future__ import annotations

from urllib.parse import quote, unquote


class UrlDecodeError(ValueError):
    """The decoded bytes are not valid UTF-8."""


def encode_url(text: str) -> str:
    """Percent-encode the UTF-8 bytes of *text*."""
    return quote(text, safe="")


def decode_url(text: str) -> str:
    """Percent-decode *text*.

    Malformed escapes such as ``%zz`` are kept as literal text.

    Raises
    ------
    UrlDecodeError
        If the decoded byte sequence is not valid UTF-8.
    """
    try:
        return unquote(text, encoding="utf-8", errors="strict")
    except UnicodeDecodeError as exc:
        raise UrlDecodeError(str(exc)) from exc
