"""
Payments CLI - batch account replay

Commands:
- payments process - Replay a transaction CSV into an account report
- payments entries - Show one client's ledger after ingestion
- payments verify - Verify a ledger journal hash chain
- payments version - Show version information
"""

__version__ = "0.1.0"
