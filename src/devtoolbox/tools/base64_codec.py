"""Standard Base64 (RFC 4648, padded) over UTF-8 text."""

from __future__ import annotations

import base64
import binascii


class Base64DecodeError(ValueError):
    """Input is not strict Base64, or does not decode to UTF-8 text."""


def encode_base64(text: str) -> str:
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def decode_base64(text: str) -> str:
    """Decode strict standard Base64 into text.

    Whitespace, URL-safe characters and missing padding are all rejected.
    """
    try:
        raw = base64.b64decode(text, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise Base64DecodeError(str(exc)) from exc

    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise Base64DecodeError(str(exc)) from exc
