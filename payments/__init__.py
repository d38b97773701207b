"""
Payments Replay Engine

Batch replay of client transaction logs into final account balances.
"""

__version__ = "0.1.0"
