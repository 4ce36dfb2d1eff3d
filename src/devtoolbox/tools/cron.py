"""Cron expression parsing, upcoming fire times and field descriptions.

Accepts standard 5-field cron expressions (``minute hour day month
day_of_week``) or, with ``include_seconds``, 6-field expressions with a
leading seconds field.  Field grammar is delegated to APScheduler's
``CronTrigger``; this module adds the crontab conventions APScheduler does
not share (``?`` in the day fields, weekdays numbered 1-7 from Sunday) and the
human-readable description.
"""

from __future__ import annotations

import enum
import logging
import re
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone, tzinfo
from itertools import islice
from typing import Iterator

from apscheduler.triggers.cron import CronTrigger

from devtoolbox.i18n.catalog import translate

logger = logging.getLogger(__name__)

# CronTrigger keyword for each position of a 6-field expression
TRIGGER_FIELDS = ("second", "minute", "hour", "day", "month", "day_of_week")

# Catalog keys for the description labels, in the same positional order
FIELD_LABEL_KEYS = (
    "tools.cron.field.second",
    "tools.cron.field.minute",
    "tools.cron.field.hour",
    "tools.cron.field.day",
    "tools.cron.field.month",
    "tools.cron.field.week",
)

# Weekday numbers run 1-7 starting on Sunday
_WEEKDAY_NAMES = ("sun", "mon", "tue", "wed", "thu", "fri", "sat")
_NUMERIC_WEEKDAY_RE = re.compile(r"^(\*|[0-9]+(?:-[0-9]+)?)(?:/([0-9]+))?$")

# Upper bound on one-second steps taken to get past a repeated DST hour
_MAX_STALLED_STEPS = 2 * 60 * 60


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class CronError(ValueError):
    """Base class for cron expression errors."""


class EmptyInputError(CronError):
    """The expression is empty or whitespace only."""

    def __init__(self) -> None:
        super().__init__("Cron expression is empty")


class FieldCountError(CronError):
    """The expression has the wrong number of fields."""


class CronSyntaxError(CronError):
    """A field was rejected by the cron grammar."""


# ---------------------------------------------------------------------------
# Output formats
# ---------------------------------------------------------------------------

class OutputFormat(str, enum.Enum):
    DEFAULT = "default"  # 2024-01-01 12:00:00
    ISO8601 = "iso8601"  # 2024-01-01T12:00:00+08:00
    UNIX = "unix"  # 1704085200


def format_time(moment: datetime, output_format: OutputFormat = OutputFormat.DEFAULT) -> str:
    """Render *moment* in the requested format, in its own timezone."""
    if output_format is OutputFormat.ISO8601:
        return moment.isoformat()
    if output_format is OutputFormat.UNIX:
        return str(int(moment.timestamp()))
    return moment.strftime("%Y-%m-%d %H:%M:%S")


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Schedule:
    """A validated cron expression.

    ``fields`` always holds six entries, seconds first, exactly as the user
    wrote them.  Schedules compare equal when their fields are equal.
    """

    fields: tuple[str, ...]
    trigger: CronTrigger = field(compare=False, repr=False)

    @property
    def expression(self) -> str:
        return " ".join(self.fields)

    @property
    def timezone(self) -> tzinfo:
        return self.trigger.timezone

    def upcoming(self, now: datetime | None = None) -> Iterator[datetime]:
        """Yield fire times strictly after *now* (default: the current time).

        Fire times are returned in the schedule's timezone.  The sequence is
        infinite unless the trigger can never fire again, e.g. ``0 0 30 2 *``.
        """
        # Step in UTC: wall-clock arithmetic on an aware datetime loses the
        # fold during a DST fall-back and moves the cursor back an hour.
        cursor = (now if now is not None else datetime.now(self.timezone)).astimezone(timezone.utc)
        last: datetime | None = None
        stalled = 0
        while True:
            fire_time = self.trigger.get_next_fire_time(
                None, cursor + timedelta(microseconds=1)
            )
            if fire_time is None:
                logger.warning("upcoming: '%s' has no further fire times", self.expression)
                return

            if last is not None and fire_time <= last:
                # Repeated wall-clock period: walk the cursor through it
                stalled += 1
                if stalled > _MAX_STALLED_STEPS:
                    logger.warning("upcoming: '%s' stopped advancing after %s", self.expression, last)
                    return
                cursor += timedelta(seconds=1)
                continue

            stalled = 0
            fire_time = fire_time.astimezone(self.timezone)
            yield fire_time
            last = fire_time
            cursor = fire_time.astimezone(timezone.utc)


def _crontab_day_of_week(value: str) -> str:
    """Rewrite numeric weekdays (1 = Sunday ... 7 = Saturday) into names.

    APScheduler counts weekdays from Monday = 0, so numeric items are
    expanded to explicit names.  Items that are not plain numbers, ranges or
    steps (``mon-fri``, ``last sun``) are passed through unchanged.

    Raises ``ValueError`` for numbers outside 1-7, empty ranges and zero
    steps.
    """
    if value in ("*", "?"):
        return "*"

    items: list[str] = []
    for item in value.split(","):
        match = _NUMERIC_WEEKDAY_RE.match(item)
        if match is None or (match.group(1) == "*" and match.group(2) is None):
            items.append(item)
            continue

        base, step = match.group(1), int(match.group(2) or 1)
        if base == "*":
            low, high = 1, 7
        elif "-" in base:
            low, high = (int(part) for part in base.split("-"))
        else:
            low = int(base)
            high = 7 if match.group(2) else low

        if not 1 <= low <= high <= 7:
            raise ValueError(
                f"Invalid day of week '{item}': values must be 1-7 (1 = Sunday) in ascending order"
            )
        if step == 0:
            raise ValueError(f"Invalid day of week '{item}': step must be at least 1")

        for day in range(low, high + 1, step):
            name = _WEEKDAY_NAMES[day - 1]
            if name not in items:
                items.append(name)

    return ",".join(items)


def _trigger_kwargs(fields: tuple[str, ...]) -> dict[str, str]:
    kwargs = dict(zip(TRIGGER_FIELDS, fields))
    # ``?`` is only meaningful for the two day fields
    if kwargs["day"] == "?":
        kwargs["day"] = "*"
    kwargs["day_of_week"] = _crontab_day_of_week(fields[5])
    return kwargs


def parse_cron(
    expression: str,
    include_seconds: bool = False,
    timezone: tzinfo | str | None = None,
) -> Schedule:
    """Parse and validate *expression*.

    Without ``include_seconds`` a ``0`` seconds field is prepended, so
    ``parse_cron(expr)`` is equivalent to
    ``parse_cron("0 " + expr, include_seconds=True)``.

    ``timezone`` defaults to the local system timezone.

    Raises
    ------
    EmptyInputError
        If the expression is empty or whitespace only.
    FieldCountError
        If the expression does not have 5 (or, with seconds, 6) fields.
    CronSyntaxError
        If a field is rejected by the grammar.  Messages from APScheduler
        are passed through unchanged.
    """
    if not expression or not expression.strip():
        raise EmptyInputError()

    parts = expression.split()
    expected = 6 if include_seconds else 5
    if len(parts) != expected:
        raise FieldCountError(
            f"Invalid cron expression '{expression}': expected {expected} fields, got {len(parts)}"
        )
    if not include_seconds:
        parts.insert(0, "0")
    fields = tuple(parts)

    try:
        trigger = CronTrigger(**_trigger_kwargs(fields), timezone=timezone)
    except ValueError as exc:
        logger.debug("parse_cron: rejected '%s': %s", expression, exc)
        raise CronSyntaxError(str(exc)) from exc

    return Schedule(fields=fields, trigger=trigger)


def next_occurrences(
    schedule: Schedule,
    count: int,
    output_format: OutputFormat = OutputFormat.DEFAULT,
    now: datetime | None = None,
) -> list[str]:
    """Return the next *count* fire times after *now*, formatted."""
    if count < 0:
        raise ValueError(f"count must be non-negative, got {count}")
    return [
        format_time(fire_time, output_format)
        for fire_time in islice(schedule.upcoming(now), count)
    ]


# ---------------------------------------------------------------------------
# Description
# ---------------------------------------------------------------------------

def describe_field(value: str, locale: str | None = None) -> str:
    """Describe one cron field.

    Fields with more than one ``/`` or ``-`` are echoed back verbatim.
    """
    if value == "*":
        return translate("tools.cron.field.every", locale)
    if value == "?":
        return translate("tools.cron.field.any", locale)
    if "/" in value:
        parts = value.split("/")
        if len(parts) != 2:
            return value
        return f"{translate('tools.cron.field.every', locale)} {parts[1]}"
    if "-" in value:
        parts = value.split("-")
        if len(parts) != 2:
            return value
        return translate("tools.cron.field.from", locale, start=parts[0], end=parts[1])
    if "," in value:
        return f"{translate('tools.cron.field.specific', locale)} [{value}]"
    return value


def describe_cron(
    expression: str,
    include_seconds: bool = False,
    locale: str | None = None,
    strict: bool = False,
) -> str:
    """Describe *expression* one field per line, e.g. ``Minute: every 15``.

    The expression is split independently of :func:`parse_cron`.  When the
    field count is wrong the localized ``invalid_expression`` message is
    returned, or with ``strict=True`` a :class:`FieldCountError` is raised.
    """
    parts = expression.split()
    expected = 6 if include_seconds else 5

    if len(parts) != expected:
        if strict:
            raise FieldCountError(
                f"Invalid cron expression '{expression}': expected {expected} fields, got {len(parts)}"
            )
        return translate("tools.cron.invalid_expression", locale)

    label_keys = FIELD_LABEL_KEYS if include_seconds else FIELD_LABEL_KEYS[1:]
    return "\n".join(
        f"{translate(label_key, locale)}: {describe_field(part, locale)}"
        for label_key, part in zip(label_keys, parts)
    )
