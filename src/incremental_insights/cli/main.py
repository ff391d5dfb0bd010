"""Main CLI entry point."""

import argparse
import json
import logging
import sys
from pathlib import Path


def _add_analysis_args(parser: argparse.ArgumentParser) -> None:
    """Input, settings, threshold and filter flags shared by every subcommand."""
    parser.add_argument(
        "--input",
        type=Path,
        required=True,
        help="Campaign performance export (.csv, .xlsx, .xlsm)",
    )
    parser.add_argument(
        "--settings",
        type=Path,
        default=None,
        help="Path to settings YAML (thresholds, filters, sort)",
    )
    parser.add_argument(
        "--score-threshold",
        type=int,
        default=None,
        help="Score must be greater than this (default: 100)",
    )
    parser.add_argument(
        "--pacing-threshold",
        type=int,
        default=None,
        help="Pacing must be at least this percent (default: 99)",
    )
    parser.add_argument("--partner", type=str, default=None, help="Only this partner")
    parser.add_argument("--advertiser", type=str, default=None, help="Only this advertiser")
    parser.add_argument("--campaign", type=str, default=None, help="Only this campaign")
    parser.add_argument(
        "--kpi-type",
        action="append",
        default=None,
        dest="kpi_types",
        help="Accepted KPI type (repeatable). Default: all types",
    )
    parser.add_argument(
        "--default-kpi-types",
        action="store_true",
        help="Accept every discovered KPI type except no-goal ones",
    )
    parser.add_argument(
        "--beating-goal",
        action="store_true",
        help="Only campaigns beating their KPI goal",
    )
    parser.add_argument(
        "--sort",
        type=str,
        default=None,
        help="Sort key, e.g. calculated_opportunity, score, partner (default: calculated_opportunity)",
    )
    parser.add_argument(
        "--asc",
        action="store_true",
        help="Sort ascending instead of descending",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write output to file (default: stdout)",
    )


def main() -> None:
    """Parse args and dispatch to subcommands."""
    parser = argparse.ArgumentParser(
        prog="incremental-insights",
        description="Find incremental budget opportunities in campaign performance exports",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # fields
    fields_parser = subparsers.add_parser("fields", help="Show which headers were detected")
    fields_parser.add_argument("--input", type=Path, required=True, help="Export file")

    # analyze
    analyze_parser = subparsers.add_parser("analyze", help="Opportunity table and totals")
    _add_analysis_args(analyze_parser)
    analyze_parser.add_argument(
        "--group-by",
        choices=["none", "advertiser", "partner"],
        default=None,
        help="Summarize by advertiser or partner (default: per campaign)",
    )
    analyze_parser.add_argument(
        "--limit",
        type=int,
        default=100,
        help="Max table rows (default: 100)",
    )
    analyze_parser.add_argument(
        "--json",
        action="store_true",
        help="Write processed records and totals as JSON",
    )
    analyze_parser.add_argument(
        "--explain",
        action="store_true",
        help="Include per-record filter explanations (with --json)",
    )

    # pivot
    pivot_parser = subparsers.add_parser("pivot", help="Partner > advertiser > campaign rollup")
    _add_analysis_args(pivot_parser)
    pivot_parser.add_argument(
        "--collapse",
        action="store_true",
        help="Show partner rows only",
    )

    # targets
    targets_parser = subparsers.add_parser("targets", help="List report targets for a scope")
    _add_analysis_args(targets_parser)
    targets_parser.add_argument(
        "--scope",
        choices=["partner", "advertiser", "campaign"],
        default="partner",
    )

    # report
    report_parser = subparsers.add_parser("report", help="Generate an opportunity report")
    _add_analysis_args(report_parser)
    report_parser.add_argument(
        "--scope",
        choices=["partner", "advertiser", "campaign"],
        default="partner",
        help="What the target names (default: partner)",
    )
    report_parser.add_argument("--target", type=str, required=True, help="Partner/advertiser/campaign name")
    report_parser.add_argument(
        "--style",
        choices=["executive", "action", "standard"],
        default="standard",
        help="Report template (default: standard)",
    )

    args = parser.parse_args()
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if args.command == "fields":
        _run_fields(args)
    elif args.command == "analyze":
        _run_analyze(args)
    elif args.command == "pivot":
        _run_pivot(args)
    elif args.command == "targets":
        _run_targets(args)
    elif args.command == "report":
        _run_report(args)
    else:
        parser.print_help()


def _read_rows(path: Path) -> list:
    """Read export rows; exits with status 1 on empty or unreadable input."""
    from incremental_insights.errors import EmptyDatasetError, IngestionError
    from incremental_insights.loaders import read_export

    try:
        return read_export(path)
    except EmptyDatasetError:
        print(f"{path} appears to be empty. Choose a different file.", file=sys.stderr)
        raise SystemExit(1)
    except IngestionError as e:
        print(
            f"Error parsing file: {e}\nPlease ensure it is a valid Excel or CSV file.",
            file=sys.stderr,
        )
        raise SystemExit(1)


def _build_session(args: argparse.Namespace):
    """Validated settings, then a session over the input. Bad settings exit with status 1."""
    from pydantic import ValidationError

    from incremental_insights.session import AnalysisSession

    try:
        settings = _settings_from_args(args)
    except ValidationError as e:
        print(f"Invalid settings: {e}", file=sys.stderr)
        raise SystemExit(1)

    session = AnalysisSession.from_rows(_read_rows(args.input), settings)
    if args.default_kpi_types and not args.kpi_types:
        session.set_criteria(
            settings.criteria.model_copy(update={"kpi_types": session.default_kpi_types()})
        )
    return session


def _settings_from_args(args: argparse.Namespace):
    """Settings from YAML (if given) overridden by flags. Raises ValidationError."""
    from incremental_insights.models.settings import (
        AnalysisSettings,
        FilterCriteria,
        GroupBy,
        SortDirection,
        SortSpec,
        Thresholds,
    )

    settings = AnalysisSettings.from_yaml(args.settings) if args.settings else AnalysisSettings()
    thresholds = Thresholds(
        score_threshold=(
            args.score_threshold
            if args.score_threshold is not None
            else settings.thresholds.score_threshold
        ),
        pacing_threshold=(
            args.pacing_threshold
            if args.pacing_threshold is not None
            else settings.thresholds.pacing_threshold
        ),
    )
    base = settings.criteria
    criteria = FilterCriteria(
        partner=args.partner if args.partner is not None else base.partner,
        advertiser=args.advertiser if args.advertiser is not None else base.advertiser,
        campaign=args.campaign if args.campaign is not None else base.campaign,
        kpi_types=frozenset(args.kpi_types) if args.kpi_types else base.kpi_types,
        only_beating_goal=args.beating_goal or base.only_beating_goal,
    )
    sort = settings.sort
    if args.sort or args.asc:
        sort = SortSpec(
            key=args.sort or sort.key,
            direction=SortDirection.ASC if args.asc else SortDirection.DESC,
        )
    group_by = settings.group_by
    if getattr(args, "group_by", None):
        group_by = GroupBy(args.group_by)

    return AnalysisSettings(thresholds=thresholds, criteria=criteria, sort=sort, group_by=group_by)


def _write(args: argparse.Namespace, output: str, summary: str) -> None:
    if args.output:
        args.output.write_text(output, encoding="utf-8")
        print(summary)
    else:
        print(output)


def _run_fields(args: argparse.Namespace) -> None:
    """Run fields command."""
    from incremental_insights.models.fields import CanonicalField
    from incremental_insights.normalization import resolve_fields

    rows = _read_rows(args.input)
    field_map = resolve_fields(rows[0].headers)
    for field in CanonicalField:
        header = field_map.get(field)
        print(f"  {field.value:<20} {header if header is not None else '(not found)'}")


def _run_analyze(args: argparse.Namespace) -> None:
    """Run analyze command."""
    from incremental_insights.formatting import format_currency
    from incremental_insights.reporting import render_text_table

    session = _build_session(args)
    totals = session.totals
    processed = session.processed

    if args.json:
        output_data: dict = {
            "totals": totals,
            "records": [r.model_dump(mode="json") for r in session.sorted_records()],
        }
        if args.explain:
            output_data["filter_results"] = [
                {
                    "index": r.record.index,
                    "passed": r.passed,
                    "excluded_by_rule": r.excluded_by_rule,
                    "explanations": r.explanations,
                }
                for r in session.explain()
            ]
        output = json.dumps(output_data, indent=2, default=str)
    else:
        view = session.table(row_limit=args.limit)
        output = "\n".join(
            [
                f"Campaigns: {len(processed)}",
                f"Qualifying: {totals['qualifying_count']}",
                f"Total Opportunity: {format_currency(totals['total_opportunity'])}",
                "",
                render_text_table(view),
            ]
        )

    _write(
        args,
        output,
        f"Analyzed: {totals['qualifying_count']} qualifying of {len(processed)} (wrote to {args.output})",
    )


def _run_pivot(args: argparse.Namespace) -> None:
    """Run pivot command."""
    from incremental_insights.aggregation import PivotLevel, all_node_ids, visible_rows
    from incremental_insights.formatting import format_currency

    session = _build_session(args)
    tree = session.pivot()
    expanded = frozenset() if args.collapse else all_node_ids(tree)

    lines: list[str] = []
    for row in visible_rows(tree, expanded):
        indent = "  " * row.depth
        if row.level == PivotLevel.CAMPAIGN:
            rec = row.record
            lines.append(
                f"{indent}{row.name or '-'}  score {rec.score:g}  "
                f"budget {format_currency(rec.incremental_budget)}  "
                f"opp {format_currency(rec.calculated_opportunity)}"
            )
        else:
            m = row.metrics
            lines.append(
                f"{indent}{row.name} ({m.count})  avg score {m.display_avg_score}  "
                f"budget {format_currency(m.incremental_budget_sum)}  "
                f"opp {format_currency(m.calculated_opportunity_sum)}"
            )
    _write(args, "\n".join(lines), f"Wrote pivot for {len(tree)} partners to {args.output}")


def _run_targets(args: argparse.Namespace) -> None:
    """Run targets command."""
    session = _build_session(args)
    for target in session.report_targets(args.scope):
        print(target)


def _run_report(args: argparse.Namespace) -> None:
    """Run report command."""
    session = _build_session(args)
    report = session.report(args.scope, args.target, args.style)
    _write(args, report.text, f"Wrote {args.style} report for {args.target} to {args.output}")


if __name__ == "__main__":
    main()
