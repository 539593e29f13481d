"""Core module for ld-manifest."""

import re
from dataclasses import dataclass, field
from datetime import date
from typing import Optional

SEASON_PATTERN = re.compile(r'^(\d{4})-(\d{4})$')

# First month (1-based) of a new season
SEASON_START_MONTH = 8


@dataclass(frozen=True)
class Season:
    """A debate season spanning two calendar years, e.g. 2025-2026."""

    start_year: int
    end_year: int

    @classmethod
    def from_name(cls, name: str) -> Optional['Season']:
        """Parse a season folder name like ``2025-2026``."""
        m = SEASON_PATTERN.match(name.strip())
        if not m:
            return None
        return cls(int(m.group(1)), int(m.group(2)))

    @classmethod
    def containing(cls, day: date) -> 'Season':
        """Return the season a calendar day belongs to."""
        if day.month >= SEASON_START_MONTH:
            return cls(day.year, day.year + 1)
        return cls(day.year - 1, day.year)

    def year_for_month(self, month: int) -> int:
        """Infer the calendar year of a month (1-12) within this season."""
        if month >= SEASON_START_MONTH:
            return self.start_year
        return self.end_year


@dataclass(frozen=True)
class DateRecord:
    """One parsed row of a reference date table."""

    original_name: str
    date: date
    date_str: str   # Raw date text as written in the table


@dataclass(frozen=True)
class TournamentFolder:
    """A tournament directory discovered inside a season."""

    name: str
    path: str                   # Relative path, e.g. 2025-2026/LD/Blue Key
    entries: Optional[str] = None
    prelims: tuple[str, ...] = ()
    elims: tuple[str, ...] = ()


@dataclass
class TournamentDateBinding:
    """Association of a tournament folder with its resolved date."""

    folder: TournamentFolder
    date: Optional[date]
    date_str: Optional[str]
    match_type: str = 'NONE'   # EXACT, CONTAINS, SUFFIX, FUZZY, NONE

    @property
    def name(self) -> str:
        return self.folder.name


@dataclass
class SeasonResult:
    """Chronologically ordered bindings of one season."""

    season: str
    bindings: list[TournamentDateBinding] = field(default_factory=list)
    reference_names: list[str] = field(default_factory=list)
