"""Pydantic v2 schemas for the tool endpoints."""

from pydantic import BaseModel, Field

from devtoolbox.tools.cron import OutputFormat
from devtoolbox.tools.json_format import JsonFormatType


class TextIn(BaseModel):
    input: str


class TextOut(BaseModel):
    output: str


class JsonFormatIn(BaseModel):
    input: str
    format_type: JsonFormatType = JsonFormatType.STANDARD


class CronParseIn(BaseModel):
    expression: str
    include_seconds: bool = False
    output_format: OutputFormat = OutputFormat.DEFAULT
    # Defaults to settings.CRON_NEXT_RUNS when omitted
    count: int | None = Field(default=None, ge=0)


class CronParseOut(BaseModel):
    expression: str
    description: str
    next_runs: list[str]


class CronDescribeIn(BaseModel):
    expression: str
    include_seconds: bool = False
    strict: bool = False


class CronDescribeOut(BaseModel):
    description: str

