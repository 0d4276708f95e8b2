"""
Pack Variant Base Class

Shared base class for the pack-size variants a product name can carry.
"""

from abc import ABC
import polars as pl


class PackVariant(ABC):
    """
    Base class for all pack variants.

    Attributes:
        IDENTITY
            name            - Column stem (e.g., "pack_of_one")
            label           - Display label (e.g., "Pack of One")

        MATCHING
            pattern         - Case-insensitive regex searched in the product name
            priority        - Rank when several patterns match (1 = highest, wins)

        PHYSICAL
            weight_kg       - Shipping weight of one pack
            units_per_pack  - Sellable units in one pack
    """

    # -------------------------------------------------------------------------
    # IDENTITY
    # -------------------------------------------------------------------------
    name: str
    label: str

    # -------------------------------------------------------------------------
    # MATCHING
    # -------------------------------------------------------------------------
    pattern: str
    priority: int

    # -------------------------------------------------------------------------
    # PHYSICAL
    # -------------------------------------------------------------------------
    weight_kg: float
    units_per_pack: int

    # -------------------------------------------------------------------------
    # METHODS
    # -------------------------------------------------------------------------

    @classmethod
    def conditions(cls, col: str = "product_name") -> pl.Expr:
        """Polars expression, True where the product name carries this variant."""
        return pl.col(col).str.contains(cls.pattern)

    @classmethod
    def strip_token(cls, col: str = "product_name") -> pl.Expr:
        """Product name with every occurrence of this variant's token removed."""
        return pl.col(col).str.replace_all(cls.pattern, "").str.strip_chars()

    @classmethod
    def count_col(cls) -> str:
        """Per-order pack count column."""
        return f"{cls.name}_count"

    @classmethod
    def sold_col(cls) -> str:
        """Per-product units sold column."""
        return f"{cls.name}_sold"
