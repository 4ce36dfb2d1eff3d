"""Text tool endpoints: URL, Base64, JSON and cron.

Each endpoint is a thin wrapper around the pure functions in
``devtoolbox.tools``; domain errors are turned into ``422`` responses with a
localized ``detail``.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from devtoolbox.settings import settings
from devtoolbox.i18n.catalog import translate
from devtoolbox.i18n.routes import get_locale
from devtoolbox.tools.base64_codec import Base64DecodeError, decode_base64, encode_base64
from devtoolbox.tools.cron import (
    CronError,
    EmptyInputError,
    FieldCountError,
    describe_cron,
    next_occurrences,
    parse_cron,
)
from devtoolbox.tools.json_format import JsonFormatError, format_json, minify_json
from devtoolbox.tools.schemas import (
    CronDescribeIn,
    CronDescribeOut,
    CronParseIn,
    CronParseOut,
    JsonFormatIn,
    TextIn,
    TextOut,
)
from devtoolbox.tools.url_codec import UrlDecodeError, decode_url, encode_url

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/tools", tags=["tools"])


def _invalid(label_key: str, locale: str, exc: Exception) -> HTTPException:
    """Build a 422 whose detail reads ``<localized label>: <error>``."""
    return HTTPException(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        detail=f"{translate(label_key, locale)}: {exc}",
    )


# -- URL ----------------------------------------------------------------------

@router.post("/url/encode", response_model=TextOut)
def url_encode(body: TextIn) -> TextOut:
    """Percent-encode the input."""
    return TextOut(output=encode_url(body.input))


@router.post("/url/decode", response_model=TextOut)
def url_decode(body: TextIn, locale: str = Depends(get_locale)) -> TextOut:
    """Percent-decode the input."""
    try:
        return TextOut(output=decode_url(body.input))
    except UrlDecodeError as exc:
        logger.warning("url_decode: %s", exc)
        raise _invalid("tools.url.invalid_url", locale, exc) from exc


# -- Base64 -------------------------------------------------------------------

@router.post("/base64/encode", response_model=TextOut)
def base64_encode(body: TextIn) -> TextOut:
    """Base64-encode the UTF-8 bytes of the input."""
    return TextOut(output=encode_base64(body.input))


@router.post("/base64/decode", response_model=TextOut)
def base64_decode(body: TextIn, locale: str = Depends(get_locale)) -> TextOut:
    """Decode strict standard Base64 into text."""
    try:
        return TextOut(output=decode_base64(body.input))
    except Base64DecodeError as exc:
        logger.warning("base64_decode: %s", exc)
        raise _invalid("tools.base64.invalid_base64", locale, exc) from exc


# -- JSON ---------------------------------------------------------------------

@router.post("/json/format", response_model=TextOut)
def json_format(body: JsonFormatIn, locale: str = Depends(get_locale)) -> TextOut:
    """Pretty-print the input in the requested style."""
    try:
        return TextOut(output=format_json(body.input, body.format_type))
    except JsonFormatError as exc:
        logger.warning("json_format: %s", exc)
        raise _invalid("tools.json.invalid_json", locale, exc) from exc


@router.post("/json/minify", response_model=TextOut)
def json_minify(body: TextIn, locale: str = Depends(get_locale)) -> TextOut:
    """Strip insignificant whitespace from the input."""
    try:
        return TextOut(output=minify_json(body.input))
    except JsonFormatError as exc:
        logger.warning("json_minify: %s", exc)
        raise _invalid("tools.json.invalid_json", locale, exc) from exc


# -- Cron ---------------------------------------------------------------------

@router.post("/cron/parse", response_model=CronParseOut)
def cron_parse(body: CronParseIn, locale: str = Depends(get_locale)) -> CronParseOut:
    """Validate a cron expression, describe it and list its next fire times.

    Fire times are computed in the server's local timezone.
    """
    count = settings.CRON_NEXT_RUNS if body.count is None else min(body.count, settings.CRON_MAX_RUNS)

    try:
        schedule = parse_cron(body.expression, body.include_seconds)
    except EmptyInputError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=(
                f"{translate('tools.cron.invalid_input', locale)}: "
                f"{translate('tools.cron.input_placeholder', locale)}"
            ),
        ) from exc
    except CronError as exc:
        logger.warning("cron_parse: rejected '%s': %s", body.expression, exc)
        raise _invalid("tools.cron.invalid_cron", locale, exc) from exc

    return CronParseOut(
        expression=body.expression,
        description=describe_cron(body.expression, body.include_seconds, locale),
        next_runs=next_occurrences(schedule, count, body.output_format),
    )


@router.post("/cron/describe", response_model=CronDescribeOut)
def cron_describe(body: CronDescribeIn, locale: str = Depends(get_locale)) -> CronDescribeOut:
    """Describe a cron expression field by field without validating it."""
    try:
        description = describe_cron(
            body.expression, body.include_seconds, locale, strict=body.strict
        )
    except FieldCountError as exc:
        raise _invalid("tools.cron.invalid_expression", locale, exc) from exc
    return CronDescribeOut(description=description)
