"""
Pack Variants Package

Exports the pack variants and the expressions that classify order lines.

Classification:
    Variants compete by priority - the highest priority (lowest number)
    whose pattern matches wins. "Pack of 2" is checked before "Pack of 1".
    Names without any token fall back to UNTAGGED (canonical policy), or to
    no variant at all when the strict policy is requested.
"""

import polars as pl

from .base import PackVariant
from .pack_of_one import PACK_OF_ONE
from .pack_of_two import PACK_OF_TWO


# All variants
ALL = [PACK_OF_ONE, PACK_OF_TWO]

# Fallback for product names without a pack token
UNTAGGED = PACK_OF_ONE

# Leftover separator after the token is removed: a trailing dash, a leading
# dash, or a trailing empty "()" pair. Only the first match is removed.
LEFTOVER_PATTERN = r"\s*-\s*$|^\s*-\s*|\s*\(\s*\)\s*$"


# =============================================================================
# HELPERS
# =============================================================================

def by_priority() -> list[type[PackVariant]]:
    """Variants sorted by priority (highest first)."""
    return sorted(ALL, key=lambda v: v.priority)


def classify(
    untagged_as_pack_of_one: bool = True,
    col: str = "product_name",
) -> pl.Expr:
    """
    Pack variant name for each row.

    Args:
        untagged_as_pack_of_one: Count names without a token as UNTAGGED.
            When False they get a null variant and count toward no bucket.
        col: Product name column

    Returns:
        Utf8 expression aliased "pack_variant"
    """
    variants = by_priority()

    expr = pl.when(variants[0].conditions(col)).then(pl.lit(variants[0].name))
    for variant in variants[1:]:
        expr = expr.when(variant.conditions(col)).then(pl.lit(variant.name))

    if untagged_as_pack_of_one:
        fallback = pl.lit(UNTAGGED.name)
    else:
        fallback = pl.lit(None, dtype=pl.Utf8)

    return expr.otherwise(fallback).alias("pack_variant")


def base_name(col: str = "product_name") -> pl.Expr:
    """
    Product name with its pack token removed.

    Only the token of the matched variant is removed (all occurrences,
    case-insensitive). Untagged names are kept as they are, then the
    leftover separator is cleaned up.

    Returns:
        Utf8 expression aliased "base_name"
    """
    variants = by_priority()

    expr = pl.when(variants[0].conditions(col)).then(variants[0].strip_token(col))
    for variant in variants[1:]:
        expr = expr.when(variant.conditions(col)).then(variant.strip_token(col))
    stripped = expr.otherwise(pl.col(col))

    return (
        stripped
        .str.replace(LEFTOVER_PATTERN, "")
        .str.strip_chars()
        .alias("base_name")
    )


def unit_columns(target: str, units_col: str = "quantity") -> list[pl.Expr]:
    """
    One column per variant holding the row's units for that variant.

    Args:
        target: "count" for per-order columns, "sold" for per-product columns
        units_col: Column with the line quantity

    Returns:
        List of Int64 expressions (0 where the row is another variant)
    """
    columns = []
    for variant in ALL:
        alias = variant.count_col() if target == "count" else variant.sold_col()
        columns.append(
            pl.when(pl.col("pack_variant") == variant.name)
            .then(pl.col(units_col))
            .otherwise(pl.lit(0, dtype=pl.Int64))
            .alias(alias)
        )
    return columns


__all__ = [
    "PackVariant",
    "PACK_OF_ONE",
    "PACK_OF_TWO",
    "ALL",
    "UNTAGGED",
    "LEFTOVER_PATTERN",
    "by_priority",
    "classify",
    "base_name",
    "unit_columns",
]
