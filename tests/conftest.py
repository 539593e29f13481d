"""Shared test fixtures."""

from pathlib import Path

import pytest

from ldmanifest import Season
from ldmanifest.reader import load_tournament_dates


DATA_DIR = Path(__file__).resolve().parent / 'data'

SEASON_TABLE = '''Date,Tournament Name
"August 22-23, 2025",Season Opener
"September 19-21, 2025",Grapevine
"January 30-February 1, 2026",Blue Key
'''

ROOT_TABLE = '''Date,Tournament Name
"October 3-5, 2024",Yale Invitational
'''


def _touch(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text('', encoding='utf-8')


@pytest.fixture(scope='session')
def data_dir() -> Path:
    """Path to the data directory."""
    return DATA_DIR


@pytest.fixture(scope='session')
def season() -> Season:
    return Season(2025, 2026)


@pytest.fixture(scope='session')
def csv_dates(season):
    """Date table from Tournament_Dates.csv."""
    return load_tournament_dates(DATA_DIR / 'Tournament_Dates.csv', season)


@pytest.fixture
def results_tree(tmp_path) -> Path:
    """A small results tree with three seasons.

    2025-2026 has its own date table, 2024-2025 relies on the root-level
    table and 2023-2024 has no LD directory at all.
    """
    root = tmp_path / 'results'
    ld = root / '2025-2026' / 'LD'

    _touch(ld / 'Blue Key' / 'BlueKey_Entries.csv')
    _touch(ld / 'Blue Key' / 'Prelims' / 'R2.csv')
    _touch(ld / 'Blue Key' / 'Prelims' / 'R1.csv')
    _touch(ld / 'Blue Key' / 'Prelims' / 'notes.txt')
    _touch(ld / 'Blue Key' / 'Elims' / 'Finals.csv')
    _touch(ld / 'Season Opener' / 'Prelims' / 'R1.csv')
    (ld / 'Grapevine Classic').mkdir(parents=True)
    (ld / 'Mystery Invitational').mkdir(parents=True)
    (ld / 'Tournament_Dates.csv').write_text(SEASON_TABLE, encoding='utf-8')

    _touch(root / '2024-2025' / 'LD' / 'Yale' / 'Prelims' / 'R1.csv')
    (root / '2023-2024').mkdir(parents=True)
    (root / 'notes').mkdir()
    _touch(root / 'README.md')
    (root / 'Tournament_Dates.csv').write_text(ROOT_TABLE, encoding='utf-8')
    return root
