"""
Row Preparation

Turns parsed report rows (string columns named as in the source report) into
the typed row schema used by the aggregators.

    - text fields are trimmed, empty strings become null
    - quantity defaults to 1 when it cannot be read or is 0
    - money fields default to 0 when they cannot be read
    - a source column that is missing behaves as all-null
"""

import polars as pl

from ..expressions import clean_text, parse_int, parse_float
from .columns import (
    SOURCE_COLUMNS,
    ROW_SCHEMA,
    TEXT_COLS,
    MONEY_COLS,
    QUANTITY_DEFAULT,
    MONEY_DEFAULT,
)


def prepare_rows(report: pl.DataFrame) -> pl.DataFrame:
    """
    Prepare parsed report rows for aggregation.

    Args:
        report: Parsed report DataFrame (source column names)

    Returns:
        DataFrame with ROW_SCHEMA columns, in the same row order
    """
    if report.width == 0:
        return pl.DataFrame(schema=ROW_SCHEMA)

    return (
        report
        .with_columns([_source(report, col).alias(col) for col in SOURCE_COLUMNS])
        .select(list(SOURCE_COLUMNS))
        .with_columns(
            [clean_text(pl.col(col)).alias(col) for col in TEXT_COLS]
            + [
                _quantity(parse_int(pl.col("quantity"))).alias("quantity")
            ]
            + [
                parse_float(pl.col(col)).fill_null(MONEY_DEFAULT).alias(col)
                for col in MONEY_COLS
            ]
        )
        .cast(ROW_SCHEMA)
    )


def _quantity(parsed: pl.Expr) -> pl.Expr:
    """Unreadable or zero quantities count as one unit."""
    return (
        pl.when(parsed.fill_null(0) == 0)
        .then(pl.lit(QUANTITY_DEFAULT, dtype=pl.Int64))
        .otherwise(parsed)
    )


def _source(report: pl.DataFrame, col: str) -> pl.Expr:
    """Source column as text, or a null column if the report lacks it."""
    source = SOURCE_COLUMNS[col]
    if source in report.columns:
        return pl.col(source).cast(pl.Utf8)
    return pl.lit(None, dtype=pl.Utf8)


__all__ = ["prepare_rows"]
