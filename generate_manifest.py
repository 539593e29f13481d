"""ld-manifest – builds manifest.json for a tree of LD debate results."""

import argparse
import logging
from pathlib import Path

from ldmanifest import Season, SeasonResult
from ldmanifest.matching import bind_tournaments
from ldmanifest.reader import load_tournament_dates
from ldmanifest.reporter import (
    print_summary,
    write_csv_report,
    write_html_report,
    write_manifest,
)
from ldmanifest.scanner import DEFAULT_DIVISION, discover_seasons, find_dates_table, scan_season
from ldmanifest.sorting import sort_bindings


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        description='Index debate tournament results by season and order them chronologically.',
        prog='generate_manifest.py',
    )
    parser.add_argument(
        '--root', type=Path, default=Path('.'),
        help='Root of the results tree (default: current directory)',
    )
    parser.add_argument(
        '--output', type=Path, default=Path('manifest.json'),
        help='Path for the manifest JSON (default: manifest.json)',
    )
    parser.add_argument(
        '--division', default=DEFAULT_DIVISION,
        help=f'Event subdirectory inside each season (default: {DEFAULT_DIVISION})',
    )
    parser.add_argument(
        '--csv', type=Path,
        help='Additionally write the tournament order as CSV',
    )
    parser.add_argument(
        '--html', type=Path,
        help='Additionally write the tournament order as HTML',
    )
    parser.add_argument(
        '--summary', action='store_true',
        help='Print the chronological order and unmatched tournaments',
    )
    parser.add_argument(
        '--fuzzy-threshold', type=float, default=None,
        help='Enable fuzzy name matching at this Jaro-Winkler similarity (0-1)',
    )
    parser.add_argument(
        '-v', '--verbose', action='store_true',
        help='Log skipped table rows',
    )
    return parser


def process_season(
    root: Path,
    season: str,
    division: str,
    fuzzy_threshold: float | None = None,
) -> SeasonResult:
    """Scan, date and sort the tournaments of one season."""
    folders = scan_season(root, season, division)

    dates_path = find_dates_table(root, season, division)
    if dates_path is None:
        logging.warning(
            "No tournament dates table for %s, tournaments will not be sorted chronologically",
            season,
        )
        table = {}
    else:
        table = load_tournament_dates(dates_path, Season.from_name(season))

    bindings = bind_tournaments(folders, table, fuzzy_threshold)
    return SeasonResult(
        season=season,
        bindings=sort_bindings(bindings),
        reference_names=[r.original_name for r in table.values()],
    )


def generate(
    root: Path,
    division: str = DEFAULT_DIVISION,
    fuzzy_threshold: float | None = None,
) -> list[SeasonResult]:
    """Process every season under root, newest first."""
    results = []
    for season in discover_seasons(root):
        logging.info("Processing %s ...", season)
        results.append(process_season(root, season, division, fuzzy_threshold))
    return results


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(levelname)s: %(message)s',
    )

    if not args.root.is_dir():
        parser.error(f'--root {args.root} is not a directory.')

    if args.fuzzy_threshold is not None and not 0.0 <= args.fuzzy_threshold <= 1.0:
        parser.error('--fuzzy-threshold must be between 0 and 1.')

    results = generate(args.root, args.division, args.fuzzy_threshold)
    if not results:
        logging.warning("No season folders (YYYY-YYYY) found in %s.", args.root)

    write_manifest(results, args.output)

    if args.csv:
        write_csv_report(results, args.csv)

    if args.html:
        write_html_report(results, args.html)

    if args.summary:
        print_summary(results)

    logging.info(
        "Seasons: %s, total tournaments: %d",
        ', '.join(r.season for r in results) or '-',
        sum(len(r.bindings) for r in results),
    )


if __name__ == '__main__':
    main()
