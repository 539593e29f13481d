"""Multi-stage matching of tournament folder names against a date table."""

import logging
import re
from typing import Optional

from rapidfuzz.distance import JaroWinkler

from ldmanifest import DateRecord, TournamentDateBinding, TournamentFolder

log = logging.getLogger(__name__)

# Words that folder names and reference tables disagree on
TOURNAMENT_SUFFIXES = ('invitational', 'tournament', 'classic', 'memorial', 'forum')

_NON_ALNUM_RE = re.compile(r'[^a-z0-9]')


def normalize_name(name: Optional[str]) -> str:
    """Normalize a tournament name for lookup.

    "Blue Key", "BlueKey" and "blue-key!!" all become "bluekey".
    """
    if not name:
        return ''
    return _NON_ALNUM_RE.sub('', name.lower())


def strip_suffixes(key: str) -> str:
    """Remove common tournament suffixes from a normalized name."""
    for suffix in TOURNAMENT_SUFFIXES:
        key = key.replace(suffix, '')
    return key


def _contains_either(a: str, b: str) -> bool:
    return a in b or b in a


def _try_fuzzy_match(
    key: str,
    table: dict[str, DateRecord],
    threshold: float,
) -> DateRecord | None:
    """Find the table entry most similar to key (Jaro-Winkler, 0-1 scale)."""
    best_record: DateRecord | None = None
    best_sim = -1.0
    for ref_key, record in table.items():
        sim = JaroWinkler.similarity(key, ref_key)
        if sim >= threshold and sim > best_sim:
            best_sim = sim
            best_record = record
    return best_record


def match_tournament(
    folder_name: str,
    table: dict[str, DateRecord],
    fuzzy_threshold: float | None = None,
) -> tuple[DateRecord | None, str]:
    """Find the date record for a tournament folder name.

    Uses a multi-stage approach, first hit wins:
    1. Exact normalized name (hash lookup)
    2. Containment in either direction, in table order
    3. Containment after stripping common suffixes
    4. Fuzzy matching (only when fuzzy_threshold is set)
    5. Unmatched -> NONE

    Stages 2 and 3 return the first qualifying entry in table insertion
    order, so the order of rows in the reference table decides ties.

    Args:
        folder_name: Tournament directory name.
        table: Date table from the reader.
        fuzzy_threshold: Minimum Jaro-Winkler similarity for stage 4.

    Returns:
        Tuple of (DateRecord or None, match type).
    """
    key = normalize_name(folder_name)
    if not key or not table:
        return None, 'NONE'

    # Stage 1: Exact match
    record = table.get(key)
    if record is not None:
        return record, 'EXACT'

    # Stage 2: Containment
    for ref_key, record in table.items():
        if _contains_either(key, ref_key):
            return record, 'CONTAINS'

    # Stage 3: Containment without suffixes
    stripped = strip_suffixes(key)
    if stripped:
        stripped_table: dict[str, DateRecord] = {}
        for ref_key, record in table.items():
            ref_stripped = strip_suffixes(ref_key)
            if ref_stripped:
                stripped_table.setdefault(ref_stripped, record)

        record = stripped_table.get(stripped)
        if record is not None:
            return record, 'SUFFIX'
        for ref_stripped, record in stripped_table.items():
            if _contains_either(stripped, ref_stripped):
                return record, 'SUFFIX'

    # Stage 4: Fuzzy match
    if fuzzy_threshold is not None:
        record = _try_fuzzy_match(key, table, fuzzy_threshold)
        if record is not None:
            return record, 'FUZZY'

    return None, 'NONE'


def resolve_tournament_date(
    folder_name: str,
    table: dict[str, DateRecord],
) -> DateRecord | None:
    """Return the DateRecord matching a folder name, or None."""
    record, _ = match_tournament(folder_name, table)
    return record


def bind_tournaments(
    folders: list[TournamentFolder],
    table: dict[str, DateRecord],
    fuzzy_threshold: float | None = None,
    logger: logging.Logger | None = None,
) -> list[TournamentDateBinding]:
    """Resolve the date of every tournament folder.

    Args:
        folders: Tournament folders of one season.
        table: Date table for that season.
        fuzzy_threshold: Enables the fuzzy stage when set.
        logger: Diagnostic channel; defaults to this module's logger.

    Returns:
        One TournamentDateBinding per folder, in input order.
    """
    logger = logger or log
    bindings: list[TournamentDateBinding] = []

    for folder in folders:
        record, match_type = match_tournament(folder.name, table, fuzzy_threshold)
        bindings.append(TournamentDateBinding(
            folder=folder,
            date=record.date if record else None,
            date_str=record.date_str if record else None,
            match_type=match_type,
        ))
        logger.info(
            'Found: %s - %d prelims, %d elims [%s]',
            folder.name, len(folder.prelims), len(folder.elims),
            record.date_str if record else 'NO DATE FOUND',
        )

    unmatched = [b.name for b in bindings if b.date is None]
    if unmatched:
        logger.info(
            '%d of %d tournaments without a date: %s',
            len(unmatched), len(bindings), ', '.join(unmatched),
        )
    return bindings
