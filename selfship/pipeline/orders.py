"""
Order Aggregator

Self-ship cost per shipped order:

    1. Keep shipped lines with an order id and a product name
    2. Classify each line's pack variant, multiply by quantity
    3. Group lines by order id (first-seen order)
    4. Weight = sum of pack weights, billed on the next whole kilogram
    5. Rate per kg from the rate card by state, DEFAULT_RATE if absent
    6. Shipping cost = rounded weight * rate
"""

import math

import polars as pl

from ..data import DEFAULT_RATE, rates_to_frame
from ..packs import ALL as ALL_PACKS, classify, unit_columns
from .columns import ORDER_COLS, SHIPPED_STATUS


# =============================================================================
# MAIN ENTRY POINT
# =============================================================================

def compute_orders(
    rows: pl.DataFrame,
    rates: dict[str, float],
    default_rate: float = DEFAULT_RATE,
    untagged_as_pack_of_one: bool = True,
) -> pl.DataFrame:
    """
    Calculate self-ship cost for every shipped order.

    Args:
        rows: Prepared rows (see prepare_rows)
        rates: Rate card, normalised state -> rate per kg
        default_rate: Rate used for states missing from the rate card
        untagged_as_pack_of_one: Count lines without a pack token as one
            pack of one (False counts them toward neither variant)

    Returns:
        DataFrame with ORDER_COLS, one row per order id in first-seen order
    """
    lines = _shipped_lines(rows)
    lines = lines.with_columns(classify(untagged_as_pack_of_one))
    lines = lines.with_columns(unit_columns("count"))

    orders = _group_orders(lines)
    orders = _add_weight(orders)
    orders = _lookup_rate(orders, rates, default_rate)
    orders = _add_shipping_cost(orders)

    return orders.select(ORDER_COLS)


# =============================================================================
# STEPS
# =============================================================================

def _shipped_lines(rows: pl.DataFrame) -> pl.DataFrame:
    """Shipped lines that carry both an order id and a product name."""
    return rows.filter(
        (pl.col("order_status").str.to_lowercase() == SHIPPED_STATUS) &
        pl.col("order_id").is_not_null() &
        pl.col("product_name").is_not_null()
    )


def _group_orders(lines: pl.DataFrame) -> pl.DataFrame:
    """
    One row per order id.

    The order's state comes from its first line. Line items keep product
    name and quantity in input order for detail display.
    """
    return lines.group_by("order_id", maintain_order=True).agg(
        [pl.col("ship_state").first().str.to_uppercase().alias("state")]
        + [pl.col(v.count_col()).sum() for v in ALL_PACKS]
        + [pl.struct(["product_name", "quantity"]).alias("line_items")]
    )


def _add_weight(df: pl.DataFrame) -> pl.DataFrame:
    """Add total weight and the whole-kilogram billing weight."""
    df = df.with_columns(
        pl.sum_horizontal(
            [pl.col(v.count_col()) * v.weight_kg for v in ALL_PACKS]
        )
        .cast(pl.Float64)
        .alias("total_weight_kg")
    )
    return df.with_columns(
        pl.col("total_weight_kg").ceil().cast(pl.Int64).alias("rounded_weight_kg")
    )


def _lookup_rate(
    df: pl.DataFrame,
    rates: dict[str, float],
    default_rate: float,
) -> pl.DataFrame:
    """
    Look up rate per kg by state.

    Orders whose state is missing from the rate card (or blank) get the
    default rate and are flagged with rate_was_defaulted.
    """
    df = df.with_row_index("_row_id")

    df = (
        df
        .join(rates_to_frame(rates), on="state", how="left")
        .sort("_row_id")
        .drop("_row_id")
    )

    return df.with_columns([
        pl.col("rate_per_kg").is_null().alias("rate_was_defaulted"),
        pl.col("rate_per_kg").fill_null(float(default_rate)),
    ])


def _add_shipping_cost(df: pl.DataFrame) -> pl.DataFrame:
    """Shipping cost = rounded weight * rate per kg."""
    return df.with_columns(
        (pl.col("rounded_weight_kg") * pl.col("rate_per_kg")).alias("shipping_cost")
    )


# =============================================================================
# SUMMARY
# =============================================================================

def total_shipping_cost(orders: pl.DataFrame) -> float:
    """Sum of shipping cost over all orders."""
    if orders.height == 0:
        return 0.0
    return float(orders["shipping_cost"].sum())


def average_cost_per_order(orders: pl.DataFrame) -> int | None:
    """
    Average shipping cost per order, rounded to a whole amount (halves up).

    Returns None when there are no orders.
    """
    if orders.height == 0:
        return None
    average = total_shipping_cost(orders) / orders.height
    return math.floor(average + 0.5)


def any_rate_defaulted(orders: pl.DataFrame) -> bool:
    """True if at least one order used the default rate."""
    return orders.height > 0 and bool(orders["rate_was_defaulted"].any())


__all__ = [
    "compute_orders",
    "total_shipping_cost",
    "average_cost_per_order",
    "any_rate_defaulted",
]
