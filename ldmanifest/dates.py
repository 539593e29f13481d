"""Parsing of free-text tournament date ranges into start dates."""

import logging
import re
from datetime import date
from typing import Optional

from ldmanifest import Season

log = logging.getLogger(__name__)

# (token, month) pairs, matched case-insensitively at a word start.
# Misspellings seen in real reference tables are listed explicitly.
MONTH_NAMES: tuple[tuple[str, int], ...] = (
    ('january', 1), ('jan', 1),
    ('february', 2), ('feb', 2),
    ('march', 3), ('mar', 3),
    ('april', 4), ('apr', 4),
    # A bare "may" is always read as the month, even in "may be moved"
    ('may', 5),
    ('june', 6), ('jun', 6),
    ('july', 7), ('jul', 7),
    ('august', 8), ('aug', 8),
    ('september', 9), ('sept', 9), ('sep', 9),
    ('october', 10), ('oct', 10),
    ('november', 11), ('nov', 11),
    ('december', 12), ('dec', 12),
    # Historical misspellings
    ('spetember', 9),
)

_MONTH_LOOKUP = dict(MONTH_NAMES)

# Longest tokens first so "september" wins over "sep" at the same position
_MONTH_RE = re.compile(
    r'\b('
    + '|'.join(sorted((re.escape(t) for t, _ in MONTH_NAMES), key=len, reverse=True))
    + r')(?![a-z])'
)
# Seasons start in 2020 or later
_YEAR_RE = re.compile(r'\b(20[2-9]\d)\b')
# A day number directly after a run of letters ("january 30", "sept. 5")
_DAY_RE = re.compile(r'[a-z]+\.?\s*(\d{1,2})(?!\d)')
_PARENTHETICAL_RE = re.compile(r'\(.*?\)')
_WHITESPACE_RE = re.compile(r'\s+')


def is_blank(value: Optional[str]) -> bool:
    """True for None, empty, whitespace-only or 'nan' cells."""
    if value is None:
        return True
    value = value.strip()
    return value == '' or value.lower() == 'nan'


def strip_parentheticals(text: str) -> str:
    """Remove annotations like ``(tentative)`` and collapse whitespace."""
    return _WHITESPACE_RE.sub(' ', _PARENTHETICAL_RE.sub(' ', text)).strip()


def find_month(text: str) -> Optional[tuple[int, int]]:
    """Find the earliest month token in lowercased text.

    Returns:
        Tuple of (month number 1-12, position of the token) or None.
    """
    m = _MONTH_RE.search(text)
    if not m:
        return None
    return _MONTH_LOOKUP[m.group(1)], m.start()


def parse_start_date(
    text: Optional[str],
    season: Optional[Season] = None,
    logger: Optional[logging.Logger] = None,
) -> Optional[date]:
    """Parse a date range like "January 30-February 1, 2026" into its start date.

    The earliest month token in the string is taken as the start month and
    the first day number following it as the start day. When the text has
    no year, it is inferred from the season: August-December fall into the
    season's first year, January-July into its second.

    Args:
        text: Raw date text from a reference table.
        season: Season used to infer a missing year. Defaults to the season
            containing today's date.
        logger: Diagnostic channel; defaults to this module's logger.

    Returns:
        The start date, or None if the text cannot be parsed.
    """
    logger = logger or log
    if is_blank(text):
        return None

    cleaned = strip_parentheticals(text)
    lowered = cleaned.lower()

    year_match = _YEAR_RE.search(lowered)
    year = int(year_match.group(1)) if year_match else None

    found = find_month(lowered)
    if found is None:
        logger.warning('Could not parse month from: "%s"', cleaned)
        return None
    month, position = found

    day_match = _DAY_RE.search(lowered, position)
    if not day_match:
        logger.warning('Could not parse day from: "%s"', cleaned)
        return None
    day = int(day_match.group(1))

    if year is None:
        if season is None:
            season = Season.containing(date.today())
        year = season.year_for_month(month)

    try:
        return date(year, month, day)
    except ValueError as exc:
        logger.warning('Could not create date from: "%s" (%s)', cleaned, exc)
        return None
