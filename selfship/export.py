"""
Result Export

Writes the shipping results and product sales tables as CSV. Column names
and number formatting are fixed so exported files stay comparable between
runs:

    - Total Weight (kg) always has two decimals ("2.00")
    - whole-valued amounts are written without a decimal part ("110")
    - Total Sales is rounded to two decimals
"""

from pathlib import Path

import polars as pl

from .packs import PACK_OF_ONE, PACK_OF_TWO
from .pipeline.columns import SHIPPING_EXPORT_COLS, PRODUCT_EXPORT_COLS


SHIPPING_RESULTS_FILE = "shipping_calculation_results.csv"
PRODUCT_SALES_FILE = "product_sales.csv"


# =============================================================================
# TABLES
# =============================================================================

def shipping_results_table(orders: pl.DataFrame) -> pl.DataFrame:
    """Shipping results in export layout (S.No. counts from 1)."""
    return (
        orders
        .with_row_index("S.No.", offset=1)
        .select([
            pl.col("S.No."),
            pl.col("order_id").alias("Order ID"),
            pl.col("state").alias("State"),
            _fixed_2dp(pl.col("total_weight_kg")).alias("Total Weight (kg)"),
            pl.col("rounded_weight_kg").alias("Rounded Weight (kg)"),
            _plain_number(pl.col("rate_per_kg")).alias("Rate per kg"),
            _plain_number(pl.col("shipping_cost")).alias("Shipping Cost"),
        ])
        .select(SHIPPING_EXPORT_COLS)
    )


def product_sales_table(products: pl.DataFrame) -> pl.DataFrame:
    """Product sales in export layout; Total Units counts a pack of two as 2."""
    return (
        products
        .with_row_index("S.No.", offset=1)
        .select([
            pl.col("S.No."),
            pl.col("base_name").alias("Product Name"),
            pl.col(PACK_OF_ONE.sold_col()).alias("Pack of One Sold"),
            pl.col(PACK_OF_TWO.sold_col()).alias("Pack of Two Sold"),
            (
                pl.col(PACK_OF_ONE.sold_col()) * PACK_OF_ONE.units_per_pack +
                pl.col(PACK_OF_TWO.sold_col()) * PACK_OF_TWO.units_per_pack
            ).alias("Total Units"),
            _plain_number(pl.col("total_sales").round(2)).alias("Total Sales"),
        ])
        .select(PRODUCT_EXPORT_COLS)
    )


# =============================================================================
# WRITERS
# =============================================================================

def write_shipping_results(
    orders: pl.DataFrame,
    path: str | Path | None = None,
) -> str | None:
    """Write shipping results CSV to path, or return the CSV text if no path."""
    return shipping_results_table(orders).write_csv(path)


def write_product_sales(
    products: pl.DataFrame,
    path: str | Path | None = None,
) -> str | None:
    """Write product sales CSV to path, or return the CSV text if no path."""
    return product_sales_table(products).write_csv(path)


# =============================================================================
# FORMATTING
# =============================================================================

def _plain_number(expr: pl.Expr) -> pl.Expr:
    """Float as text, without ".0" when the value is whole."""
    return (
        pl.when(expr == expr.floor())
        .then(expr.cast(pl.Int64, strict=False).cast(pl.Utf8))
        .otherwise(expr.cast(pl.Utf8))
    )


def _fixed_2dp(expr: pl.Expr) -> pl.Expr:
    """Float as text with exactly two decimals ("-0.50", "2.00")."""
    cents = (expr * 100).round(0).cast(pl.Int64, strict=False)
    magnitude = cents.abs()
    return pl.format(
        "{}{}.{}",
        pl.when(cents < 0).then(pl.lit("-")).otherwise(pl.lit("")),
        magnitude // 100,
        (magnitude % 100).cast(pl.Utf8).str.zfill(2),
    )


__all__ = [
    "shipping_results_table",
    "product_sales_table",
    "write_shipping_results",
    "write_product_sales",
    "SHIPPING_RESULTS_FILE",
    "PRODUCT_SALES_FILE",
]
