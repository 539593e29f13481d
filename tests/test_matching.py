"""Tests for ldmanifest.matching module."""

import logging
from datetime import date

import pytest

from ldmanifest import DateRecord, TournamentFolder
from ldmanifest.matching import (
    TOURNAMENT_SUFFIXES,
    bind_tournaments,
    match_tournament,
    normalize_name,
    resolve_tournament_date,
    strip_suffixes,
)


def _table(*names: str) -> dict[str, DateRecord]:
    """Build a date table with one record per name, dated a week apart."""
    table = {}
    for i, name in enumerate(names):
        table[normalize_name(name)] = DateRecord(
            original_name=name,
            date=date(2025, 9, 1 + 7 * i),
            date_str=f'September {1 + 7 * i}, 2025',
        )
    return table


def _folder(name: str, **kwargs) -> TournamentFolder:
    defaults = dict(path=f'2025-2026/LD/{name}')
    defaults.update(kwargs)
    return TournamentFolder(name=name, **defaults)


class TestNormalizeName:
    """Tests for name normalization."""

    def test_variants_equal(self):
        assert normalize_name('Blue Key') == normalize_name('BlueKey') == normalize_name('blue-key!!')

    def test_keeps_digits(self):
        assert normalize_name('TOC 2026') == 'toc2026'

    def test_drops_non_ascii(self):
        assert normalize_name('Café Open') == 'cafopen'

    def test_empty(self):
        assert normalize_name('') == ''
        assert normalize_name(None) == ''


class TestStripSuffixes:
    """Tests for suffix stripping."""

    def test_known_suffixes(self):
        assert set(TOURNAMENT_SUFFIXES) == {
            'invitational', 'tournament', 'classic', 'memorial', 'forum',
        }

    def test_strips_all(self):
        assert strip_suffixes('applevalleyinvitationaltournament') == 'applevalley'


class TestExactMatch:
    """Tests for stage 1: exact matching."""

    def test_exact_match_found(self):
        table = _table('Blue Key')
        record, match_type = match_tournament('Blue Key', table)
        assert match_type == 'EXACT'
        assert record.original_name == 'Blue Key'

    def test_exact_match_ignores_formatting(self):
        record, match_type = match_tournament('blue_key', _table('Blue Key'))
        assert match_type == 'EXACT'

    def test_exact_beats_earlier_substring(self):
        table = _table('Yale', 'Yale Invitational')
        record, match_type = match_tournament('Yale Invitational', table)
        assert match_type == 'EXACT'
        assert record.original_name == 'Yale Invitational'


class TestContainsMatch:
    """Tests for stage 2: containment matching."""

    def test_table_key_inside_folder_name(self):
        record, match_type = match_tournament('Harvard Round Robin', _table('Harvard'))
        assert match_type == 'CONTAINS'
        assert record.original_name == 'Harvard'

    def test_folder_name_inside_table_key(self):
        record, match_type = match_tournament('Glenbrooks', _table('Glenbrooks Speech and Debate'))
        assert match_type == 'CONTAINS'

    def test_first_entry_in_table_order_wins(self):
        table = _table('Blue', 'Blue Key')
        record, _ = match_tournament('Blue Key Tournament', table)
        assert record.original_name == 'Blue'

    def test_contains_preferred_over_suffix(self):
        record, match_type = match_tournament('Yale Invitational', _table('Yale'))
        assert match_type == 'CONTAINS'


class TestSuffixMatch:
    """Tests for stage 3: matching without common suffixes."""

    def test_different_suffixes(self):
        record, match_type = match_tournament(
            'Apple Valley Invitational', _table('Apple Valley Tournament'),
        )
        assert match_type == 'SUFFIX'
        assert record.original_name == 'Apple Valley Tournament'

    def test_containment_after_stripping(self):
        record, match_type = match_tournament(
            'Lexington Tournament', _table('Lexington Winter Invitational'),
        )
        assert match_type == 'SUFFIX'

    def test_suffix_only_name_does_not_match_everything(self):
        record, match_type = match_tournament('Invitational', _table('Blue Key Classic'))
        assert record is None
        assert match_type == 'NONE'


class TestFuzzyMatch:
    """Tests for stage 4: optional fuzzy matching."""

    def test_disabled_by_default(self):
        record, match_type = match_tournament('Grapvine', _table('Grapevine'))
        assert record is None
        assert match_type == 'NONE'

    def test_enabled_with_threshold(self):
        record, match_type = match_tournament('Grapvine', _table('Grapevine'), fuzzy_threshold=0.85)
        assert match_type == 'FUZZY'
        assert record.original_name == 'Grapevine'

    def test_below_threshold(self):
        record, match_type = match_tournament('Xyz Open', _table('Grapevine'), fuzzy_threshold=0.85)
        assert match_type == 'NONE'


class TestNoMatch:
    """Tests for stage 5: no match."""

    @pytest.mark.parametrize('name', ['Blue Key', 'Harvard', '', '!!!'])
    def test_empty_table(self, name):
        assert resolve_tournament_date(name, {}) is None

    def test_empty_folder_name(self):
        assert match_tournament('!!!', _table('Blue Key')) == (None, 'NONE')

    def test_unrelated_name(self):
        assert resolve_tournament_date('Stanford', _table('Blue Key', 'Harvard')) is None


class TestResolveTournamentDate:
    """Tests for the record-only wrapper."""

    def test_returns_record(self):
        table = _table('Season Opener', 'Blue Key')
        assert resolve_tournament_date('Blue Key', table) is table['bluekey']

    def test_fuzzy_not_used(self):
        assert resolve_tournament_date('Grapvine', _table('Grapevine')) is None


class TestBindTournaments:
    """Tests for binding folders to dates."""

    def test_bindings_in_input_order(self):
        table = _table('Blue Key', 'Harvard')
        folders = [_folder('Harvard'), _folder('Mystery'), _folder('Blue Key')]
        bindings = bind_tournaments(folders, table)

        assert [b.name for b in bindings] == ['Harvard', 'Mystery', 'Blue Key']
        assert bindings[0].date == table['harvard'].date
        assert bindings[0].date_str == table['harvard'].date_str
        assert bindings[0].match_type == 'EXACT'
        assert bindings[1].date is None
        assert bindings[1].date_str is None
        assert bindings[1].match_type == 'NONE'

    def test_progress_logged(self, caplog):
        folders = [
            _folder('Blue Key', prelims=('R1.csv', 'R2.csv'), elims=('Finals.csv',)),
            _folder('Mystery'),
        ]
        with caplog.at_level(logging.INFO):
            bind_tournaments(folders, _table('Blue Key'))
        assert 'Found: Blue Key - 2 prelims, 1 elims [September 1, 2025]' in caplog.text
        assert 'Found: Mystery - 0 prelims, 0 elims [NO DATE FOUND]' in caplog.text
        assert '1 of 2 tournaments without a date: Mystery' in caplog.text

    def test_fuzzy_threshold_passed_through(self):
        bindings = bind_tournaments([_folder('Grapvine')], _table('Grapevine'), fuzzy_threshold=0.85)
        assert bindings[0].match_type == 'FUZZY'

    def test_unmatched_names_logged(self, caplog):
        folders = [_folder('Zeta Open'), _folder('Blue Key'), _folder('Alpha Forum')]
        with caplog.at_level(logging.INFO):
            bind_tournaments(folders, _table('Blue Key'))
        assert '2 of 3 tournaments without a date: Zeta Open, Alpha Forum' in caplog.text
