"""
Self-Ship Calculator

Order report in, shipping costs and product sales out.

USAGE
-----
    from selfship.pipeline.parse import load_report
    from selfship.data import load_rates
    from selfship.calculate_costs import process_report

    report = load_report("orders.txt")
    result = process_report(report.rows, load_rates())
"""

from .version import VERSION

__all__ = ["VERSION"]
