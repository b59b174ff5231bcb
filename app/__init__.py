"""
                Restaurant Ordering API

A small backend for restaurant menu management and order placement,
with order totals computed server-side from authoritative menu prices.

Version: 1.0.0
License: MIT
"""

__version__ = "1.0.0"
