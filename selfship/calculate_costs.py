"""
Self-Ship Report Calculator

DataFrame in, results out. The input is a parsed order report (any source,
as long as it carries the order report columns); the output is a RunResult
holding the per-order shipping costs and the per-product sales.

REQUIRED INPUT COLUMNS
----------------------
    amazon-order-id         - Order identifier
    product-name            - Listing title (carries "Pack of N")
    quantity                - Packs on the line
    ship-state              - Destination state
    order-status            - Shipped / Pending / Cancelled / ...
    item-price              - Line total
    item-promotion-discount - Discount on the line
    shipping-price          - Shipping charged to the buyer

Missing columns are treated as empty.

OUTPUT
------
    RunResult.orders    - see pipeline.columns.ORDER_COLS
    RunResult.products  - see pipeline.columns.PRODUCT_COLS
    RunResult.total_shipping_revenue

USAGE
-----
    from selfship.calculate_costs import process_report
    result = process_report(report_df, rates)
"""

from dataclasses import dataclass

import polars as pl

from .data import DEFAULT_RATE
from .errors import ProcessingError
from .pipeline.rows import prepare_rows
from .pipeline.orders import compute_orders
from .pipeline.sales import compute_sales
from .version import VERSION


@dataclass(frozen=True)
class RunResult:
    """One processing run. Rebuilt from scratch on every run."""

    orders: pl.DataFrame
    products: pl.DataFrame
    total_shipping_revenue: float
    calculator_version: str = VERSION


# =============================================================================
# MAIN ENTRY POINT
# =============================================================================

def process_report(
    report: pl.DataFrame,
    rates: dict[str, float],
    default_rate: float = DEFAULT_RATE,
    untagged_as_pack_of_one: bool = True,
    sort_by: str = "total_sales",
) -> RunResult:
    """
    Calculate shipping costs and product sales for a parsed report.

    Args:
        report: Parsed report rows (source column names)
        rates: Rate card, normalised state -> rate per kg
        default_rate: Rate for states missing from the rate card
        untagged_as_pack_of_one: Count names without a pack token as pack of one
        sort_by: Product order, "total_sales" or "units"

    Returns:
        RunResult

    Raises:
        ProcessingError: If anything fails; no partial result is returned
    """
    try:
        rows = prepare_rows(report)
        orders = compute_orders(
            rows,
            rates,
            default_rate=default_rate,
            untagged_as_pack_of_one=untagged_as_pack_of_one,
        )
        sales = compute_sales(
            rows,
            untagged_as_pack_of_one=untagged_as_pack_of_one,
            sort_by=sort_by,
        )
    except Exception as e:
        raise ProcessingError(f"Processing error: {e}") from e

    return RunResult(
        orders=orders,
        products=sales.products,
        total_shipping_revenue=sales.total_shipping_revenue,
    )


__all__ = [
    "RunResult",
    "process_report",
]
