"""
Zapboard: transaction analytics for a Lightning zap dashboard.

Pulls payment ("zap") records from LNbits wallets, normalizes them into
canonical transactions, and exposes aggregate statistics plus a sortable,
time-windowed ledger view for the presentation layer.
"""

__version__ = "0.1.0"
