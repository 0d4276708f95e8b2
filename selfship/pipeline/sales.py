"""
Sales Aggregator

Units sold per product and pack variant, with net sales and the shipping
revenue collected from buyers. Every status except cancelled counts, so
pending and unshipped lines are included here (unlike compute_orders).
"""

from dataclasses import dataclass

import polars as pl

from ..packs import ALL as ALL_PACKS, classify, base_name, unit_columns
from .columns import PRODUCT_COLS, CANCELLED_STATUS, SORT_KEYS


@dataclass(frozen=True)
class SalesResult:
    products: pl.DataFrame          # PRODUCT_COLS, one row per base name
    total_shipping_revenue: float   # Shipping charged over non-cancelled lines


# =============================================================================
# MAIN ENTRY POINT
# =============================================================================

def compute_sales(
    rows: pl.DataFrame,
    untagged_as_pack_of_one: bool = True,
    sort_by: str = "total_sales",
) -> SalesResult:
    """
    Aggregate product sales by base name and pack variant.

    Args:
        rows: Prepared rows (see prepare_rows)
        untagged_as_pack_of_one: Count lines without a pack token as pack
            of one (False counts them toward neither variant)
        sort_by: "total_sales" (net revenue, descending) or "units"
            (pack of one + pack of two sold, descending)

    Returns:
        SalesResult
    """
    if sort_by not in SORT_KEYS:
        raise ValueError(f"sort_by must be one of {SORT_KEYS}, got {sort_by!r}")

    kept = rows.filter(
        pl.col("order_status").str.to_lowercase().ne_missing(CANCELLED_STATUS)
    )

    # Counted before the product name check: shipping is revenue even on
    # lines without a product name
    revenue = float(kept["shipping_price"].sum()) if kept.height else 0.0

    lines = kept.filter(pl.col("product_name").is_not_null())
    lines = lines.with_columns(classify(untagged_as_pack_of_one))
    lines = lines.with_columns(
        [base_name()]
        + unit_columns("sold")
        + [(pl.col("item_price") - pl.col("promotion_discount")).alias("_net_sales")]
    )

    products = lines.group_by("base_name", maintain_order=True).agg(
        [pl.col(v.sold_col()).sum() for v in ALL_PACKS]
        + [pl.col("_net_sales").sum().alias("total_sales")]
    )
    products = _sort_products(products, sort_by).select(PRODUCT_COLS)

    return SalesResult(products=products, total_shipping_revenue=revenue)


def _sort_products(products: pl.DataFrame, sort_by: str) -> pl.DataFrame:
    """Sort descending; ties keep first-seen order."""
    if sort_by == "units":
        return (
            products
            .with_columns(
                pl.sum_horizontal([pl.col(v.sold_col()) for v in ALL_PACKS])
                .alias("_units")
            )
            .sort("_units", descending=True, maintain_order=True)
            .drop("_units")
        )
    return products.sort("total_sales", descending=True, maintain_order=True)


# =============================================================================
# SUMMARY
# =============================================================================

def units_by_variant(products: pl.DataFrame) -> dict[str, int]:
    """Units sold per pack variant across all products (variant name -> units)."""
    return {
        v.name: int(products[v.sold_col()].sum()) if products.height else 0
        for v in ALL_PACKS
    }


__all__ = [
    "SalesResult",
    "compute_sales",
    "units_by_variant",
]
