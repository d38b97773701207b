"""
Event ingestion into the ledger store.
"""

from .ingestor import Ingestor, IngestReport

__all__ = [
    "Ingestor",
    "IngestReport",
]
