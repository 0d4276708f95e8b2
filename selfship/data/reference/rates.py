"""
Rate Card Configuration

Per-kilogram self-ship rates are looked up by destination state. States
missing from the rate card are billed at DEFAULT_RATE.
"""

DEFAULT_RATE = 60             # Currency units per kg when a state has no rate

# Rate card CSV columns
STATE_COLUMN = "State"        # Destination state name (normalised to upper case)
RATE_COLUMN = "Rate_per_kg"   # Price per kilogram

RATES_FILENAME = "state_wise_shipping_rates.csv"
