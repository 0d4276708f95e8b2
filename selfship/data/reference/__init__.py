"""Static reference data (rate card, defaults)."""
