"""
Natural-language date/time resolution for task fragments.

Recognises three loose spoken forms, tried in a fixed order:

    on March 5 at 14:30     explicit calendar date
    tomorrow at 10:00       relative day
    next Friday             relative week (always +7 days)

The first family whose regex finds a match anywhere in the fragment wins;
later families are never tried. Every resolved instant carries a full
date and an hour:minute; a missing or malformed time of day becomes 09:00.
"""

import logging
import re
from dataclasses import dataclass
from datetime import datetime, time, timedelta
from typing import Callable, Optional

from .models import DatePatternKind

logger = logging.getLogger(__name__)

DEFAULT_TIME = time(9, 0)

_TIME_SUFFIX = r"( at )?(?P<time>\d{1,2}:\d{2})?\s*(?P<meridiem>am|pm|AM|PM)?"


def parse_month_day(date_text: str, year: int) -> Optional[datetime]:
    """Parse "March 5" / "Mar 05" (any case) into a date in the given year.

    Returns None if the month name or day number is not valid.
    """
    for fmt in ("%B %d %Y", "%b %d %Y"):
        try:
            return datetime.strptime(f"{date_text} {year}", fmt)
        except ValueError:
            continue
    return None


def parse_time_of_day(time_text: Optional[str]) -> time:
    """Parse a captured 24-hour ``H:MM`` time, falling back to 09:00."""
    if not time_text:
        return DEFAULT_TIME
    try:
        return datetime.strptime(time_text, "%H:%M").time()
    except ValueError:
        logger.debug(f"Unparseable time {time_text!r}, using {DEFAULT_TIME:%H:%M}")
        return DEFAULT_TIME


def _explicit_date(match: re.Match, now: datetime) -> Optional[datetime]:
    """Captured month/day in the baseline year. None ends resolution."""
    parsed = parse_month_day(match.group("date"), now.year)
    if parsed is None:
        logger.debug(f"Could not parse date {match.group('date')!r}")
        return None
    return now.replace(month=parsed.month, day=parsed.day)


def _tomorrow(match: re.Match, now: datetime) -> datetime:
    return now + timedelta(days=1)


def _next_unit(match: re.Match, now: datetime) -> datetime:
    # The captured unit is not resolved to a weekday
    return now + timedelta(weeks=1)


@dataclass(frozen=True)
class DatePattern:
    """A tagged date-expression family.

    ``resolve_date`` turns a match into the date baseline; only the
    explicit-date family can return None, which leaves the fragment
    without a time.
    """
    kind: DatePatternKind
    regex: re.Pattern
    resolve_date: Callable[[re.Match, datetime], Optional[datetime]]


DATE_PATTERNS: tuple[DatePattern, ...] = (
    DatePattern(
        DatePatternKind.EXPLICIT_DATE,
        re.compile(r"on (?P<date>\w+ \d{1,2})" + _TIME_SUFFIX),
        _explicit_date,
    ),
    DatePattern(
        DatePatternKind.TOMORROW,
        re.compile(r"tomorrow" + _TIME_SUFFIX),
        _tomorrow,
    ),
    DatePattern(
        DatePatternKind.NEXT_UNIT,
        re.compile(r"next (?P<unit>\w+)" + _TIME_SUFFIX),
        _next_unit,
    ),
)

_PATTERNS_BY_KIND = {pattern.kind: pattern for pattern in DATE_PATTERNS}


def find_date_pattern(fragment: str) -> tuple[Optional[DatePattern], Optional[re.Match]]:
    """Return the first pattern family that matches the fragment, with its match."""
    for pattern in DATE_PATTERNS:
        match = pattern.regex.search(fragment)
        if match:
            return pattern, match
    return None, None


def _resolve_baseline(
    fragment: str,
    pattern: DatePattern,
    match: re.Match,
    now: datetime,
) -> Optional[datetime]:
    """Work out the date part.

    "tomorrow"/"next" anywhere in the fragment (substrings included) take
    precedence over whichever family matched; otherwise the matched
    family resolves its own date.
    """
    lowered = fragment.lower()
    if "tomorrow" in lowered:
        return _PATTERNS_BY_KIND[DatePatternKind.TOMORROW].resolve_date(match, now)
    if "next" in lowered:
        return _PATTERNS_BY_KIND[DatePatternKind.NEXT_UNIT].resolve_date(match, now)
    return pattern.resolve_date(match, now)


def resolve_datetime(fragment: str, now: datetime) -> Optional[datetime]:
    """Resolve the date/time mentioned in a fragment against ``now``.

    Args:
        fragment: A single sentence fragment, untrimmed.
        now: Baseline moment for relative expressions.

    Returns:
        A datetime with hour and minute set (seconds zeroed), or None when
        no date expression is found or an explicit date fails to parse.
    """
    pattern, match = find_date_pattern(fragment)
    if pattern is None:
        return None

    baseline = _resolve_baseline(fragment, pattern, match, now)
    if baseline is None:
        return None

    time_of_day = parse_time_of_day(match.group("time"))
    resolved = baseline.replace(
        hour=time_of_day.hour,
        minute=time_of_day.minute,
        second=0,
        microsecond=0,
    )
    logger.debug(f"Resolved {pattern.kind.value} in {fragment.strip()!r} -> {resolved.isoformat()}")
    return resolved
