"""
Pipeline Package

Core report logic (source-agnostic):
- normalize: Tab-delimited report text to CSV text
- parse: CSV text to rows, source format detection
- rows: Typed row preparation
- orders: Self-ship cost per shipped order
- sales: Units and revenue per product
"""

from .normalize import normalize_tab_report
from .parse import ParsedReport, parse_report, read_report, load_report
from .rows import prepare_rows
from .orders import compute_orders
from .sales import SalesResult, compute_sales
