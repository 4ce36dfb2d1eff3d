"""Locale preference endpoints and the per-request locale dependency."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Cookie, Depends, HTTPException, Query, Response, status

from devtoolbox.settings import settings
from devtoolbox.i18n.catalog import available_locales, is_supported, load_messages, translate
from devtoolbox.i18n.schemas import LocaleIn, LocaleOut

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/locale", tags=["locale"])

# One year
_COOKIE_MAX_AGE = 365 * 24 * 60 * 60


def get_locale(
    locale: str | None = Query(default=None),
    saved_locale: str | None = Cookie(default=None, alias=settings.LOCALE_COOKIE),
) -> str:
    """Resolve the locale for the current request.

    Order: ``?locale=`` query parameter, then the saved preference cookie,
    then ``settings.DEFAULT_LOCALE``.  Unsupported codes are skipped.
    """
    for candidate in (locale, saved_locale):
        if is_supported(candidate):
            return candidate
    return settings.DEFAULT_LOCALE


def _supported_locales() -> list[str]:
    return [code for code in settings.SUPPORTED_LOCALES if code in available_locales()]


@router.get("", response_model=LocaleOut)
def read_locale(locale: str = Depends(get_locale)) -> LocaleOut:
    """Return the resolved locale and the locales that can be selected."""
    return LocaleOut(locale=locale, available=_supported_locales())


@router.put("", response_model=LocaleOut)
def save_locale(
    body: LocaleIn,
    response: Response,
    locale: str = Depends(get_locale),
) -> LocaleOut:
    """Store the caller's locale preference in a cookie."""
    if not is_supported(body.locale):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=translate("locale.unsupported", locale, locale=body.locale),
        )

    response.set_cookie(
        key=settings.LOCALE_COOKIE,
        value=body.locale,
        max_age=_COOKIE_MAX_AGE,
        samesite="lax",
    )
    logger.info("save_locale: preference set to '%s'", body.locale)
    return LocaleOut(locale=body.locale, available=_supported_locales())


@router.get("/messages", response_model=dict[str, str])
def read_messages(locale: str = Depends(get_locale)) -> dict[str, str]:
    """Return every message for the resolved locale, keyed by dotted key.

    Keys missing from the locale fall back to the default locale.
    """
    messages = dict(load_messages(settings.DEFAULT_LOCALE))
    messages.update(load_messages(locale))
    return messages
