"""
Self-Ship Data

Rate card loader and configuration.

Structure:
    - reference/: Static reference data (rate card CSV, default rate)
"""

import polars as pl
from pathlib import Path

from ..expressions import clean_text, parse_float
from .reference.rates import (
    DEFAULT_RATE,
    STATE_COLUMN,
    RATE_COLUMN,
    RATES_FILENAME,
)


REFERENCE_DIR = Path(__file__).parent / "reference"
RATES_FILE = REFERENCE_DIR / RATES_FILENAME


def load_rates(path: str | Path | None = None) -> dict[str, float]:
    """
    Load the state rate card from CSV.

    Args:
        path: Rate card CSV with State and Rate_per_kg columns
              (bundled reference file if not provided)

    Returns:
        Mapping of normalised state name -> rate per kg
    """
    if path is None:
        path = RATES_FILE

    df = pl.read_csv(path, infer_schema=False)
    return rates_from_frame(df)


def rates_from_frame(df: pl.DataFrame) -> dict[str, float]:
    """
    Build the rate mapping from a rate card DataFrame.

    Rows with a blank state or a non-numeric (or non-positive) rate are
    skipped. If a state appears more than once, the last row wins.
    """
    rates = (
        df
        .select([
            clean_text(pl.col(STATE_COLUMN)).str.to_uppercase().alias("state"),
            parse_float(pl.col(RATE_COLUMN)).alias("rate_per_kg"),
        ])
        .filter(
            pl.col("state").is_not_null() &
            pl.col("rate_per_kg").is_not_null() &
            (pl.col("rate_per_kg") > 0)
        )
    )
    return dict(zip(rates["state"].to_list(), rates["rate_per_kg"].to_list()))


def rates_to_frame(rates: dict[str, float]) -> pl.DataFrame:
    """
    Rate mapping as a joinable DataFrame.

    Keys are normalised again so hand-built mappings ("Karnataka") match
    the upper-cased order states.

    Returns:
        DataFrame with columns: state, rate_per_kg
    """
    return (
        pl.DataFrame(
            {
                "state": [str(s).strip().upper() for s in rates.keys()],
                "rate_per_kg": [float(r) for r in rates.values()],
            },
            schema={"state": pl.Utf8, "rate_per_kg": pl.Float64},
        )
        .unique(subset="state", keep="last", maintain_order=True)
    )


__all__ = [
    "load_rates",
    "rates_from_frame",
    "rates_to_frame",
    "REFERENCE_DIR",
    "RATES_FILE",
    "DEFAULT_RATE",
    "STATE_COLUMN",
    "RATE_COLUMN",
]
