"""Reader for reference date tables (tab- or comma-delimited)."""

import logging
from pathlib import Path
from typing import Optional

from ldmanifest import DateRecord, Season
from ldmanifest.dates import is_blank, parse_start_date
from ldmanifest.matching import normalize_name

log = logging.getLogger(__name__)


def detect_encoding(path: Path) -> str:
    """Detect file encoding by checking for BOM bytes.

    Args:
        path: Path to the table file.

    Returns:
        Encoding string suitable for open().
    """
    with open(path, 'rb') as f:
        bom = f.read(2)
    if bom == b'\xff\xfe':
        return 'utf-16-le'
    return 'utf-8-sig'


def split_csv_line(line: str) -> list[str]:
    """Split a comma-delimited line, honouring double-quoted fields.

    A quote character toggles the quoted state; escaped quotes inside a
    quoted field are not supported.
    """
    columns: list[str] = []
    current: list[str] = []
    in_quote = False
    for ch in line:
        if ch == '"':
            in_quote = not in_quote
        elif ch == ',' and not in_quote:
            columns.append(''.join(current).strip())
            current = []
        else:
            current.append(ch)
    columns.append(''.join(current).strip())
    return columns


def is_header(line: str) -> bool:
    """True if the first line of a table looks like a header row."""
    lowered = line.lower()
    return 'date' in lowered and 'name' in lowered


def parse_tournament_dates(
    content: str,
    season: Optional[Season] = None,
    logger: Optional[logging.Logger] = None,
) -> dict[str, DateRecord]:
    """Parse the text of a reference date table.

    Each row holds the date text in column 0 and the tournament name in
    column 1. The delimiter is a tab if the first line contains one,
    otherwise a comma.

    Args:
        content: Raw table text.
        season: Season used to infer missing years in date texts.
        logger: Diagnostic channel; defaults to this module's logger.

    Returns:
        Mapping of normalized tournament name to DateRecord, in table order.
        A later row with the same normalized name replaces the earlier one.
    """
    logger = logger or log
    # Strip BOM if present
    content = content.lstrip('\ufeff')
    lines = [line for line in content.splitlines() if line.strip()]
    table: dict[str, DateRecord] = {}
    if not lines:
        return table

    tab_delimited = '\t' in lines[0]
    start = 1 if is_header(lines[0]) else 0

    for line_num, line in enumerate(lines[start:], start=start + 1):
        if tab_delimited:
            columns = [c.strip() for c in line.split('\t')]
        else:
            columns = split_csv_line(line)

        if len(columns) < 2:
            logger.debug('Line %d skipped: fewer than 2 columns', line_num)
            continue

        date_str, name = columns[0], columns[1]
        if is_blank(name) or is_blank(date_str):
            logger.debug('Line %d skipped: empty date or name', line_num)
            continue

        key = normalize_name(name)
        if not key:
            logger.debug('Line %d skipped: name "%s" has no letters or digits', line_num, name)
            continue

        start_date = parse_start_date(date_str, season, logger=logger)
        if start_date is None:
            continue

        if key in table:
            logger.debug(
                'Duplicate tournament "%s" on line %d replaces "%s"',
                name, line_num, table[key].original_name,
            )
        table[key] = DateRecord(original_name=name, date=start_date, date_str=date_str)

    return table


def load_tournament_dates(
    path: str | Path,
    season: Optional[Season] = None,
    logger: Optional[logging.Logger] = None,
) -> dict[str, DateRecord]:
    """Load a reference date table from a file.

    A missing file is not an error: an empty table is returned and the
    tournaments of that season simply stay undated.

    Args:
        path: Path to the table file.
        season: Season used to infer missing years in date texts.
        logger: Diagnostic channel; defaults to this module's logger.

    Returns:
        Mapping of normalized tournament name to DateRecord.
    """
    logger = logger or log
    path = Path(path)
    if not path.is_file():
        logger.warning(
            '%s not found, tournaments will not be sorted chronologically', path,
        )
        return {}

    with open(path, 'r', encoding=detect_encoding(path), errors='replace') as f:
        content = f.read()

    table = parse_tournament_dates(content, season, logger=logger)
    logger.info('Loaded %d tournament dates from %s', len(table), path)
    return table
