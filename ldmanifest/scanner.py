"""Discovery of seasons and tournament folders in a results tree.

Expected layout::

    <root>/Tournament_Dates.csv            (optional fallback table)
    <root>/2025-2026/LD/Tournament_Dates.csv
    <root>/2025-2026/LD/<tournament>/*entries*.csv
    <root>/2025-2026/LD/<tournament>/Prelims/*.csv
    <root>/2025-2026/LD/<tournament>/Elims/*.csv
"""

import logging
from pathlib import Path

from ldmanifest import SEASON_PATTERN, TournamentFolder

log = logging.getLogger(__name__)

DATES_FILENAME = 'Tournament_Dates.csv'
DEFAULT_DIVISION = 'LD'
PRELIMS_DIR = 'Prelims'
ELIMS_DIR = 'Elims'


def discover_seasons(root: str | Path) -> list[str]:
    """Return season directory names (YYYY-YYYY), newest first."""
    root = Path(root)
    seasons = [
        p.name for p in root.iterdir()
        if p.is_dir() and SEASON_PATTERN.match(p.name)
    ]
    return sorted(seasons, reverse=True)


def _csv_files(directory: Path) -> tuple[str, ...]:
    if not directory.is_dir():
        return ()
    return tuple(sorted(
        p.name for p in directory.iterdir()
        if p.is_file() and p.name.endswith('.csv')
    ))


def _find_entries_file(tournament_dir: Path) -> str | None:
    for name in _csv_files(tournament_dir):
        if 'entries' in name.lower():
            return name
    return None


def scan_tournament(root: Path, season: str, division: str, name: str) -> TournamentFolder:
    """Build the TournamentFolder for one tournament directory."""
    tournament_dir = root / season / division / name
    return TournamentFolder(
        name=name,
        path=f'{season}/{division}/{name}',
        entries=_find_entries_file(tournament_dir),
        prelims=_csv_files(tournament_dir / PRELIMS_DIR),
        elims=_csv_files(tournament_dir / ELIMS_DIR),
    )


def scan_season(
    root: str | Path,
    season: str,
    division: str = DEFAULT_DIVISION,
) -> list[TournamentFolder]:
    """Scan all tournament folders of a season.

    Args:
        root: Root of the results tree.
        season: Season directory name.
        division: Event subdirectory, e.g. LD.

    Returns:
        TournamentFolder list sorted by directory name. Empty if the
        division directory does not exist.
    """
    root = Path(root)
    division_dir = root / season / division
    if not division_dir.is_dir():
        log.warning('%s does not exist', division_dir)
        return []

    names = sorted(p.name for p in division_dir.iterdir() if p.is_dir())
    return [scan_tournament(root, season, division, name) for name in names]


def find_dates_table(
    root: str | Path,
    season: str,
    division: str = DEFAULT_DIVISION,
) -> Path | None:
    """Locate the reference date table for a season.

    The season's own table wins; otherwise the root-level table is used.
    """
    root = Path(root)
    for candidate in (root / season / division / DATES_FILENAME, root / DATES_FILENAME):
        if candidate.is_file():
            return candidate
    return None
