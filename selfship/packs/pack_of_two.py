"""
Pack of Two

Two-unit listing. Checked before PACK_OF_ONE.
"""

from .base import PackVariant


class PACK_OF_TWO(PackVariant):
    """Two units, one kilogram packed."""

    name = "pack_of_two"
    label = "Pack of Two"

    pattern = r"(?i)pack of 2"
    priority = 1

    weight_kg = 1.0
    units_per_pack = 2
