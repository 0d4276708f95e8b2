"""
Self-Ship Cost Calculator
=========================

Calculates self-ship costs and product sales for an order report (.txt or .csv)
and optionally exports both tables as CSV.

Usage:
    python -m selfship.scripts.calculator orders.txt
    python -m selfship.scripts.calculator orders.csv --rates rates.csv --output-dir out/
    python -m selfship.scripts.calculator orders.txt --strict-packs --sort-by units
"""

import argparse
import sys
from pathlib import Path

import polars as pl

from selfship.calculate_costs import RunResult
from selfship.data import DEFAULT_RATE
from selfship.export import (
    PRODUCT_SALES_FILE,
    SHIPPING_RESULTS_FILE,
    product_sales_table,
    shipping_results_table,
    write_product_sales,
    write_shipping_results,
)
from selfship.packs import PACK_OF_ONE, PACK_OF_TWO
from selfship.pipeline.columns import SORT_KEYS
from selfship.pipeline.orders import (
    any_rate_defaulted,
    average_cost_per_order,
    total_shipping_cost,
)
from selfship.pipeline.parse import read_text
from selfship.pipeline.sales import units_by_variant
from selfship.session import ReportSession
from selfship.version import VERSION


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Calculate self-ship costs and product sales for an order report",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m selfship.scripts.calculator orders.txt
  python -m selfship.scripts.calculator orders.csv --rates rates.csv
  python -m selfship.scripts.calculator orders.txt --output-dir exports/
        """,
    )
    parser.add_argument("report", type=Path, help="Order report (.txt tab-delimited or .csv)")
    parser.add_argument(
        "--rates", type=Path, default=None,
        help="Rate card CSV with State,Rate_per_kg (default: bundled rate card)",
    )
    parser.add_argument(
        "--default-rate", type=float, default=DEFAULT_RATE,
        help=f"Rate per kg for states not on the rate card (default: {DEFAULT_RATE})",
    )
    parser.add_argument(
        "--strict-packs", action="store_true",
        help="Do not count products without a 'Pack of N' token as pack of one",
    )
    parser.add_argument(
        "--sort-by", choices=SORT_KEYS, default="total_sales",
        help="Product sales order (default: total_sales)",
    )
    parser.add_argument(
        "--output-dir", type=Path, default=None,
        help="Write shipping results and product sales CSVs to this directory",
    )
    return parser.parse_args(argv)


def print_results(result: RunResult, default_rate: float) -> None:
    """Print order and product summaries."""
    orders = result.orders
    products = result.products

    print("\n" + "=" * 60)
    print("SELF-SHIP COSTS")
    print("=" * 60)

    average = average_cost_per_order(orders)
    average_text = "-" if average is None else f"{average:,}"
    print(f"Orders processed:     {orders.height:>12,}")
    print(f"Total shipping cost:  {total_shipping_cost(orders):>12,.2f}")
    print(f"Average per order:    {average_text:>12}")

    if any_rate_defaulted(orders):
        print(f"\nNotice: some states used the default rate ({default_rate:g}/kg) - not found in rates file")

    if orders.height:
        with pl.Config(tbl_rows=50, tbl_cols=-1, tbl_width_chars=160):
            print(shipping_results_table(orders))

    print("\n" + "=" * 60)
    print("PRODUCT SALES")
    print("=" * 60)

    units = units_by_variant(products)
    print(f"Unique products:      {products.height:>12,}")
    print(f"Pack of one units:    {units[PACK_OF_ONE.name]:>12,}")
    print(f"Pack of two units:    {units[PACK_OF_TWO.name]:>12,}")
    print(f"Shipping revenue:     {result.total_shipping_revenue:>12,.2f}")

    if products.height:
        with pl.Config(tbl_rows=50, tbl_cols=-1, tbl_width_chars=160, fmt_str_lengths=60):
            print(product_sales_table(products))
    print()


def export_results(result: RunResult, output_dir: Path) -> None:
    """Write both export CSVs."""
    output_dir.mkdir(parents=True, exist_ok=True)

    shipping_path = output_dir / SHIPPING_RESULTS_FILE
    write_shipping_results(result.orders, shipping_path)
    print(f"Shipping results saved to: {shipping_path}")

    products_path = output_dir / PRODUCT_SALES_FILE
    write_product_sales(result.products, products_path)
    print(f"Product sales saved to: {products_path}")


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    print(f"\n=== Self-Ship Calculator (version {VERSION}) ===")

    session = ReportSession(
        default_rate=args.default_rate,
        untagged_as_pack_of_one=not args.strict_packs,
        sort_by=args.sort_by,
    )

    rates = session.load_rates(args.rates)
    if session.warning:
        print(f"Warning: {session.warning}")
    print(f"Shipping rates: {len(rates)} states configured")

    try:
        text = read_text(args.report)
    except OSError as e:
        print(f"\nError: could not read {args.report}: {e}")
        return 1

    if not session.upload(args.report.name, text):
        print(f"\nError: {session.error}")
        return 1

    report = session.report
    converted = " (TXT->CSV)" if report.converted else ""
    print(f"Loaded {session.rows_loaded:,} rows from {report.source_name}{converted}")

    result = session.process()
    if result is None:
        print(f"\nError: {session.error}")
        return 1

    print_results(result, args.default_rate)

    if args.output_dir is not None:
        export_results(result, args.output_dir)

    return 0


if __name__ == "__main__":
    sys.exit(main())
