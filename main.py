#!/usr/bin/env python3
"""
fba-planner - command line entry point.

Loads a planning snapshot (JSON) and prints the replenishment reports for a
reference date.

Usage:
    python main.py snapshot.json                         # Report for today
    python main.py snapshot.json --today 2026-03-01      # Fixed reference date
    python main.py snapshot.json --month 2026-04         # Factory plan month
    python main.py snapshot.json --json                  # Structured output

Exit Codes:
    0 = Report produced
    1 = Snapshot or arguments could not be used

Report Sections:
    1. Dashboard (alert counts, countdowns, coverage)
    2. Shipping plan (per category)
    3. Factory plan (target month)
    4. Promotion suggestions (active promotions)
"""
import argparse
import json
import logging
import sys
from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Optional

from fba_planner.analytics import countdowns, coverage_stats, render_stock_projection, summarize
from fba_planner.config import load_settings
from fba_planner.domain.calendar import month_key, parse_date
from fba_planner.domain.models import Catalog
from fba_planner.domain.validation import validate_month
from fba_planner.persistence.snapshot_reader import load_snapshot, to_record
from fba_planner.promo_planner import plan_promotion
from fba_planner.stocking_policy import category_stats, plan_factory_month
from fba_planner.utils.error_formatting import ErrorFormatter
from fba_planner.utils.logging_config import setup_logging
from fba_planner.utils.paths import get_data_dir
from fba_planner.workflows.shipping_plan import build_shipping_plan

logger = logging.getLogger("fba_planner.cli")


def build_report(catalog: Catalog, today: date, month: str, countdown_window_days: int) -> Dict[str, Any]:
    """Run every planner against the snapshot."""
    skus = catalog.skus
    active = catalog.active_skus()
    factory_plan = plan_factory_month(
        skus, month, today,
        factory_inventory=catalog.factory_inventory,
        actual_shipments=catalog.actual_shipments,
    )
    return {
        "today": today,
        "month": month,
        "summary": summarize(skus, catalog.shipments),
        "countdowns": countdowns(today, catalog.promotions, catalog.holidays, countdown_window_days),
        "coverage": coverage_stats(active, catalog.transport),
        "shipping_plan": build_shipping_plan(skus, catalog.shipments, today, catalog.transport),
        "factory_plan": factory_plan,
        "factory_stats": category_stats(factory_plan),
        "promotions": {
            promo.name: plan_promotion(promo, skus, today, catalog.transport)
            for promo in catalog.promotions if promo.is_active
        },
    }


def _fmt(value: Optional[date]) -> str:
    return value.isoformat() if value else "-"


def render_text(report: Dict[str, Any]) -> str:
    """Plain-text rendering of a report."""
    lines: List[str] = []
    summary = report["summary"]
    lines.append("=" * 80)
    lines.append(f"FBA PLANNING REPORT  (today {report['today'].isoformat()}, factory month {report['month']})")
    lines.append("=" * 80)
    lines.append(
        f"SKUs: {summary.active_skus} active / {summary.total_skus} total, "
        f"{summary.shipping_shipments} shipments in transit"
    )
    lines.append(
        f"Alerts: {summary.urgent_count} urgent, {summary.warning_count} warning, "
        f"{summary.sufficient_count} sufficient"
    )

    coverage = report["coverage"]
    if coverage.median_days is not None:
        lines.append(
            f"Coverage: median {coverage.median_days} days (p10 {coverage.p10_days}, "
            f"p90 {coverage.p90_days}), {coverage.n_below_lead_time} SKUs below lead time"
        )
    for countdown in report["countdowns"]:
        lines.append(f"  {countdown.days:>3} days to {countdown.name} ({countdown.start_date.isoformat()})")

    for category, rows in report["shipping_plan"].items():
        lines.append("")
        lines.append(f"SHIPPING PLAN - {category.value.upper()}")
        lines.append(f"{'SKU':<20} {'Alert':<10} {'FBA':>7} {'Transit':>7} {'Days':>5} {'Stockout':<10} {'Ship by':<10} {'Qty':>6}")
        lines.append("-" * 80)
        for row in rows:
            lines.append(
                f"{row.sku:<20} {row.alert_level.value:<10} {row.fba_stock:>7} {row.in_transit_stock:>7} "
                f"{row.days_of_stock:>5} {_fmt(row.stockout_date):<10} {_fmt(row.plan_ship_date):<10} "
                f"{row.suggested_quantity:>6}"
            )

    lines.append("")
    lines.append(f"FACTORY PLAN - {report['month']}")
    lines.append(f"{'SKU':<20} {'Target':>8} {'Counted':>8} {'Suggest':>8} {'Actual':>8} {'Status':<16}")
    lines.append("-" * 80)
    for rec in report["factory_plan"]:
        lines.append(
            f"{rec.sku:<20} {rec.target_stock:>8} {rec.stock_counted:>8} {rec.suggested_order:>8} "
            f"{rec.total_actual:>8} {rec.status.value:<16}"
        )
    for category, stats in report["factory_stats"].items():
        lines.append(
            f"  {category.value}: {stats['total']} SKUs, {stats['need_additional']} need additional, "
            f"{stats['excess']} excess"
        )

    for name, suggestions in report["promotions"].items():
        lines.append("")
        lines.append(f"PROMOTION - {name}")
        if not suggestions:
            lines.append("  (missing dates or no last-year sales)")
            continue
        for s in suggestions:
            lines.append(
                f"  {s.sku:<20} extra {s.extra_demand:>6}  at start {s.stock_at_promo_start:>6}  "
                f"ship {s.need_to_ship:>6} by {s.last_ship_date.isoformat()}"
            )

    return "\n".join(lines)


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Replenishment planning report for an FBA brand snapshot",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("snapshot", type=str, help="Planning snapshot (JSON)")
    parser.add_argument("--today", type=str, help="Reference date YYYY-MM-DD (default: local date)")
    parser.add_argument("--month", type=str, help="Factory plan month YYYY-MM (default: current month)")
    parser.add_argument("--json", action="store_true", help="Print structured JSON instead of text")
    parser.add_argument("--settings", type=str, help="settings.json path")
    parser.add_argument("--chart", type=str, metavar="SKU", help="Save the projected stock chart of a SKU (PNG)")
    parser.add_argument("--chart-dir", type=str, help="Chart output directory (default: data/charts)")
    parser.add_argument("--verbose", action="store_true", help="Echo warnings to the console")

    args = parser.parse_args(argv)

    settings = load_settings(Path(args.settings) if args.settings else None)
    setup_logging(
        log_dir=settings.log_dir,
        console_level=logging.WARNING if args.verbose else logging.CRITICAL,
    )

    try:
        today = parse_date(args.today) or date.today()
    except ValueError as e:
        print(ErrorFormatter.format_validation_error("--today", args.today, "date format").format_for_display())
        logger.warning(str(e))
        return 1

    month = args.month or month_key(today)
    ok, message = validate_month(month)
    if not ok:
        print(ErrorFormatter.format_validation_error("--month", month, "month").format_for_display())
        logger.warning(message)
        return 1

    snapshot_path = Path(args.snapshot)
    try:
        catalog = load_snapshot(snapshot_path, default_transport=settings.transport)
    except (OSError, ValueError) as e:
        error = ErrorFormatter.format_snapshot_error(e, snapshot_path)
        logger.error(error.format_for_log())
        print(error.format_for_display(include_technical=args.verbose))
        return 1

    report = build_report(catalog, today, month, settings.countdown_window_days)

    if args.chart:
        sku = catalog.sku_map().get(args.chart)
        if sku is None:
            print(f"SKU not found in snapshot: {args.chart}")
            return 1
        chart_dir = Path(args.chart_dir) if args.chart_dir else get_data_dir() / "charts"
        chart_path = render_stock_projection(
            sku, catalog.shipments, today, chart_dir / f"{sku.sku}_{today.isoformat()}.png", catalog.transport
        )
        print(f"Chart saved: {chart_path}", file=sys.stderr)

    if args.json:
        payload = to_record(report)
        print(json.dumps(payload, indent=2))
    else:
        print(render_text(report))
    return 0


if __name__ == "__main__":
    sys.exit(main())
