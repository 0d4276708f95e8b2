"""
Pack of One

Single-unit listing. Also the fallback for product names without a pack token.
"""

from .base import PackVariant


class PACK_OF_ONE(PackVariant):
    """Single unit, half a kilogram packed."""

    name = "pack_of_one"
    label = "Pack of One"

    pattern = r"(?i)pack of 1"
    priority = 2

    weight_kg = 0.5
    units_per_pack = 1
