"""Pydantic v2 schemas for the locale endpoints."""

from pydantic import BaseModel


class LocaleIn(BaseModel):
    locale: str


class LocaleOut(BaseModel):
    locale: str
    available: list[str]
