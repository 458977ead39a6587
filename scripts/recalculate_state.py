#!/usr/bin/env python
"""
Recalculate a saved state file - reloads it, re-runs the calculation
engine over every item, prints a profit summary and writes it back.

Usage:
    python scripts/recalculate_state.py [path/to/profit-calculator-state.json] [--dry-run]
"""
import argparse
import dataclasses
import sys
from pathlib import Path

# Add src to path
src_path = Path(__file__).parent.parent / 'src'
sys.path.insert(0, str(src_path))

from profit_calculator.config.settings import get_settings, configure_logging
from profit_calculator.engine.sorter import SortDirection
from profit_calculator.services.workbook import Workbook


def main():
    parser = argparse.ArgumentParser(description="Recalculate a profit calculator state file")
    parser.add_argument('path', nargs='?', help="State file (default: the configured state file)")
    parser.add_argument('--dry-run', action='store_true', help="Print the summary without saving")
    args = parser.parse_args()

    configure_logging()
    # Always recalculate, whatever the import setting says
    settings = dataclasses.replace(get_settings(), recompute_on_import=True)
    path = Path(args.path) if args.path else settings.state_file

    print("=" * 60)
    print("PROFIT CALCULATOR - RECALCULATE STATE")
    print("=" * 60)
    print()

    workbook = Workbook(rows=[], settings=settings)
    result = workbook.load(path)
    if not result.valid:
        print("\n❌ LOAD FAILED")
        for error in result.errors:
            print(f"  ERROR: {error}")
        sys.exit(1)

    for warning in result.warnings:
        print(f"  WARNING: {warning}")

    # Highest profit first
    while workbook.sort_direction is not SortDirection.DESCENDING:
        workbook.toggle_sort()

    print(f"{'Item':<30} {'Final Cost':>14} {'Profit':>14}")
    print("-" * 60)
    for row in workbook.view():
        print(f"{row.item_name[:30]:<30} {row.final_cost:>14} {row.profit:>14}")
    print("-" * 60)

    summary = workbook.summary()
    print(f"Items: {summary.item_count}  (profitable: {summary.profitable_count}, loss: {summary.loss_count})")
    print(f"Total profit: {settings.currency_symbol}{summary.total_profit:,.2f}")
    print()

    if args.dry_run:
        print("Dry run - state file not written.")
        return

    if summary.item_count == 0:
        print("No items to save - state file left unchanged.")
        return

    workbook.save(path)
    print(f"✅ Saved recalculated state to {path}")


if __name__ == "__main__":
    main()
