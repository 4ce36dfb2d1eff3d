"""JSON pretty-printing and minification.

Key order is preserved in every output style.  Empty input produces empty
output rather than an error.
"""

from __future__ import annotations

import enum
import json
from typing import Any

import yaml


class JsonFormatError(ValueError):
    """The input could not be parsed or rendered."""


class JsonFormatType(str, enum.Enum):
    STANDARD = "standard"
    SINGLE_QUOTE = "single_quote"
    NO_QUOTE = "no_quote"
    YAML = "yaml"


def _load(text: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise JsonFormatError(str(exc)) from exc


def _pretty(data: Any) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False)


def _strip_key_quotes(pretty: str) -> str:
    """Rewrite ``  "key": value`` lines as ``key: value``.

    Lines are split on their first ``:``; lines without one are kept as-is.
    """
    lines = []
    for line in pretty.splitlines():
        if ":" in line:
            key, value = line.split(":", 1)
            name = key.strip().strip('"')
            lines.append(f"{name}: {value.strip()}")
        else:
            lines.append(line)
    return "\n".join(lines)


def format_json(text: str, format_type: JsonFormatType = JsonFormatType.STANDARD) -> str:
    """Re-render the JSON document in *text* in the requested style.

    Raises
    ------
    JsonFormatError
        If *text* is not valid JSON.
    """
    if not text:
        return ""

    data = _load(text)

    if format_type is JsonFormatType.YAML:
        try:
            return yaml.safe_dump(
                data,
                allow_unicode=True,
                sort_keys=False,
                default_flow_style=False,
            )
        except yaml.YAMLError as exc:
            raise JsonFormatError(str(exc)) from exc

    pretty = _pretty(data)
    if format_type is JsonFormatType.SINGLE_QUOTE:
        return pretty.replace('"', "'")
    if format_type is JsonFormatType.NO_QUOTE:
        return _strip_key_quotes(pretty)
    return pretty


def minify_json(text: str) -> str:
    """Return *text* as compact JSON with no insignificant whitespace."""
    if not text:
        return ""
    return json.dumps(_load(text), ensure_ascii=False, separators=(",", ":"))
