"""
Profit Calculator Package

A bulk cost/profit calculator for priced items.
Derives effective cost, GST, final cost and profit per row, totals and sorts
rows by profit, and saves/loads the working set as a JSON state file.
"""

__version__ = "1.0.0"
