"""
Test suite for the payments replay engine.

Focus areas:
- Ledger store contract (every backend)
- Account reconstruction rules
- Ingestion validation
- CSV input/output and CLI
"""
