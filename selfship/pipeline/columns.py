"""
Column Schema Definitions

Documents all columns at each pipeline stage.
"""

import polars as pl


# =============================================================================
# SOURCE REPORT COLUMNS (case-sensitive, as emitted by the order report)
# =============================================================================

# Prepared row column -> source report column
SOURCE_COLUMNS = {
    "order_id": "amazon-order-id",
    "product_name": "product-name",
    "quantity": "quantity",
    "ship_state": "ship-state",
    "order_status": "order-status",
    "item_price": "item-price",
    "promotion_discount": "item-promotion-discount",
    "shipping_price": "shipping-price",
}


# =============================================================================
# PREPARED ROW COLUMNS (added by prepare_rows)
# =============================================================================

ROW_SCHEMA = {
    "order_id": pl.Utf8,            # Order identifier (grouping key for orders)
    "product_name": pl.Utf8,        # Listing title, carries the pack token
    "quantity": pl.Int64,           # Packs on the line (1 if unparseable)
    "ship_state": pl.Utf8,          # Destination state, free text
    "order_status": pl.Utf8,        # Shipped / Pending / Cancelled / ...
    "item_price": pl.Float64,       # Line total (already quantity x price)
    "promotion_discount": pl.Float64,
    "shipping_price": pl.Float64,   # Shipping charged to the buyer
}

TEXT_COLS = ["order_id", "product_name", "ship_state", "order_status"]
MONEY_COLS = ["item_price", "promotion_discount", "shipping_price"]

QUANTITY_DEFAULT = 1
MONEY_DEFAULT = 0.0


# =============================================================================
# ORDER STATUSES
# =============================================================================

SHIPPED_STATUS = "shipped"      # Only status counted for self-ship costs
CANCELLED_STATUS = "cancelled"  # Only status excluded from sales


# =============================================================================
# ORDER COLUMNS (output of compute_orders)
# =============================================================================

ORDER_COLS = [
    "order_id",
    "state",                # Upper-cased ship state of the order's first line
    "pack_of_one_count",
    "pack_of_two_count",
    "line_items",           # list[struct{product_name, quantity}]
    "total_weight_kg",      # Sum of pack weights
    "rounded_weight_kg",    # ceil(total_weight_kg), billing unit
    "rate_per_kg",          # Rate card rate, or the default rate
    "shipping_cost",        # rounded_weight_kg * rate_per_kg
    "rate_was_defaulted",   # True if the state was not on the rate card
]


# =============================================================================
# PRODUCT COLUMNS (output of compute_sales)
# =============================================================================

PRODUCT_COLS = [
    "base_name",            # Product name without the pack token
    "pack_of_one_sold",
    "pack_of_two_sold",
    "total_sales",          # Sum of item_price - promotion_discount
]

SORT_KEYS = ["total_sales", "units"]


# =============================================================================
# EXPORT COLUMNS
# =============================================================================

SHIPPING_EXPORT_COLS = [
    "S.No.",
    "Order ID",
    "State",
    "Total Weight (kg)",
    "Rounded Weight (kg)",
    "Rate per kg",
    "Shipping Cost",
]

PRODUCT_EXPORT_COLS = [
    "S.No.",
    "Product Name",
    "Pack of One Sold",
    "Pack of Two Sold",
    "Total Units",
    "Total Sales",
]
