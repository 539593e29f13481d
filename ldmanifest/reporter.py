"""Manifest and report generation (JSON, CSV, HTML, summary)."""

import csv
import json
import logging
from pathlib import Path

from jinja2 import Environment, FileSystemLoader
from rapidfuzz.distance import JaroWinkler

from ldmanifest import SeasonResult, TournamentDateBinding
from ldmanifest.matching import normalize_name

log = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).resolve().parent / 'templates'

CSV_COLUMNS = [
    'Season',
    'Position',
    'Tournament',
    'Start_Date',
    'Date_Text',
    'Match_Type',
    'Entries',
    'Prelims',
    'Elims',
    'Path',
]


def _folder_to_dict(binding: TournamentDateBinding) -> dict:
    folder = binding.folder
    return {
        'name': folder.name,
        'path': folder.path,
        'entries': folder.entries,
        'prelims': list(folder.prelims),
        'elims': list(folder.elims),
    }


def build_manifest(results: list[SeasonResult]) -> dict:
    """Build the manifest structure, keeping the chronological order.

    Args:
        results: Sorted bindings per season, newest season first.

    Returns:
        Dict with "seasons" and per-season "tournamentOrder"/"tournaments".
    """
    manifest: dict = {'seasons': [r.season for r in results], 'data': {}}
    for result in results:
        manifest['data'][result.season] = {
            'tournamentOrder': [b.name for b in result.bindings],
            'tournaments': [_folder_to_dict(b) for b in result.bindings],
        }
    return manifest


def write_manifest(results: list[SeasonResult], output_path: Path) -> None:
    """Write the manifest as indented JSON."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    manifest = build_manifest(results)
    with open(output_path, 'w', encoding='utf-8') as f:
        json.dump(manifest, f, indent=2)
        f.write('\n')

    log.info("Manifest written to %s", output_path)


def _binding_to_row(season: str, position: int, binding: TournamentDateBinding) -> dict:
    """Convert a binding to a flat dict for CSV/HTML output."""
    folder = binding.folder
    return {
        'Season': season,
        'Position': str(position),
        'Tournament': folder.name,
        'Start_Date': binding.date.isoformat() if binding.date else '',
        'Date_Text': binding.date_str or '',
        'Match_Type': binding.match_type,
        'Entries': folder.entries or '',
        'Prelims': str(len(folder.prelims)),
        'Elims': str(len(folder.elims)),
        'Path': folder.path,
    }


def _rows(result: SeasonResult) -> list[dict]:
    return [
        _binding_to_row(result.season, i, b)
        for i, b in enumerate(result.bindings, start=1)
    ]


def write_csv_report(results: list[SeasonResult], output_path: Path) -> None:
    """Write the chronological order of all seasons as a CSV report.

    Uses UTF-8 with BOM (utf-8-sig) so spreadsheet tools detect the encoding.

    Args:
        results: Sorted bindings per season.
        output_path: Path for the output CSV file.
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    count = 0
    with open(output_path, 'w', newline='', encoding='utf-8-sig') as f:
        writer = csv.DictWriter(f, fieldnames=CSV_COLUMNS, extrasaction='ignore')
        writer.writeheader()
        for result in results:
            for row in _rows(result):
                writer.writerow(row)
                count += 1

    log.info("CSV report written: %s (%d rows)", output_path, count)


def write_html_report(results: list[SeasonResult], output_path: Path) -> None:
    """Write the chronological order of all seasons as an HTML report using Jinja2.

    Args:
        results: Sorted bindings per season.
        output_path: Path for the output HTML file.
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    env = Environment(
        loader=FileSystemLoader(str(TEMPLATE_DIR)),
        autoescape=True,
    )
    template = env.get_template('report.html')

    seasons = [
        {
            'name': r.season,
            'rows': _rows(r),
            'stats': compute_stats(r),
        }
        for r in results
    ]
    html = template.render(seasons=seasons, columns=CSV_COLUMNS)

    output_path.write_text(html, encoding='utf-8')
    log.info("HTML report written: %s", output_path)


def suggest_reference_name(name: str, reference_names: list[str]) -> str | None:
    """Return the reference table name most similar to a tournament name."""
    key = normalize_name(name)
    best_name: str | None = None
    best_sim = 0.0
    for ref_name in reference_names:
        sim = JaroWinkler.similarity(key, normalize_name(ref_name))
        if sim > best_sim:
            best_sim = sim
            best_name = ref_name
    return best_name


def compute_stats(result: SeasonResult) -> dict:
    """Compute summary statistics for one season."""
    bindings = result.bindings
    return {
        'total': len(bindings),
        'dated': sum(1 for b in bindings if b.date is not None),
        'undated': sum(1 for b in bindings if b.date is None),
        'exact': sum(1 for b in bindings if b.match_type == 'EXACT'),
        'contains': sum(1 for b in bindings if b.match_type == 'CONTAINS'),
        'suffix': sum(1 for b in bindings if b.match_type == 'SUFFIX'),
        'fuzzy': sum(1 for b in bindings if b.match_type == 'FUZZY'),
        'prelims': sum(len(b.folder.prelims) for b in bindings),
        'elims': sum(len(b.folder.elims) for b in bindings),
    }


def print_summary(results: list[SeasonResult]) -> None:
    """Print the chronological order and unmatched tournaments to stdout.

    Args:
        results: Sorted bindings per season.
    """
    for result in results:
        stats = compute_stats(result)

        print(f"\n=== Chronological order for {result.season} ===")
        for i, b in enumerate(result.bindings, start=1):
            print(f"  {i:>3}. {b.name} ({b.date_str or 'Unknown'})")
        print("---")
        print(f"Tournaments:               {stats['total']:>5}")
        print(f"With date:                 {stats['dated']:>5}")
        print(f"  - exact name:            {stats['exact']:>5}")
        print(f"  - partial name:          {stats['contains']:>5}")
        print(f"  - without suffix:        {stats['suffix']:>5}")
        print(f"  - fuzzy:                 {stats['fuzzy']:>5}")
        print(f"Without date:              {stats['undated']:>5}")

        unmatched = [b for b in result.bindings if b.date is None]
        if unmatched:
            print("Unmatched tournaments:")
            for b in unmatched:
                suggestion = suggest_reference_name(b.name, result.reference_names)
                hint = f" (closest reference: {suggestion})" if suggestion else ''
                print(f"  - {b.name}{hint}")

    total = sum(len(r.bindings) for r in results)
    print(f"\nSeasons: {', '.join(r.season for r in results)}")
    print(f"Total tournaments: {total}")
    print()
