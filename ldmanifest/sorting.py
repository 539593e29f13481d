"""Chronological ordering of tournament bindings."""

from ldmanifest import TournamentDateBinding


def _sort_key(binding: TournamentDateBinding) -> tuple:
    # Dated tournaments first, by start date; equal dates keep input order.
    # Undated ones after them, by name (case-folded, then lowercase before uppercase).
    if binding.date is not None:
        return (0, binding.date)
    return (1, binding.name.casefold(), binding.name.swapcase())


def sort_bindings(bindings: list[TournamentDateBinding]) -> list[TournamentDateBinding]:
    """Return bindings in chronological order.

    Tournaments without a date go to the end, alphabetically. The sort is
    stable, so tournaments sharing a start date keep their input order.
    """
    return sorted(bindings, key=_sort_key)
