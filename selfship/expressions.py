"""
Expression Helpers

Lenient text-to-value conversions shared by the row preparation and the
rate table loader. Report cells are free text, so numbers are read from
their leading numeric prefix ("300.00 INR" -> 300.0) and anything else
becomes null for the caller to default.
"""

import polars as pl


# Leading integer, e.g. "2", "+3", "2 units"
INT_PREFIX = r"^[+-]?\d+"

# Leading decimal, e.g. "300", "299.5", ".5", "1e3"
FLOAT_PREFIX = r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?"


def clean_text(expr: pl.Expr) -> pl.Expr:
    """Trim surrounding whitespace; empty strings become null."""
    stripped = expr.cast(pl.Utf8).str.strip_chars()
    return pl.when(stripped == "").then(None).otherwise(stripped)


def parse_int(expr: pl.Expr) -> pl.Expr:
    """Integer from the leading digits of a trimmed text cell, null if none."""
    return (
        expr.cast(pl.Utf8)
        .str.strip_chars()
        .str.extract(f"({INT_PREFIX})", 1)
        .cast(pl.Int64, strict=False)
    )


def parse_float(expr: pl.Expr) -> pl.Expr:
    """Decimal from the leading number of a trimmed text cell, null if none."""
    return (
        expr.cast(pl.Utf8)
        .str.strip_chars()
        .str.extract(f"({FLOAT_PREFIX})", 1)
        .cast(pl.Float64, strict=False)
    )
