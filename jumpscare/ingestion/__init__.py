"""
Ingestion Layer

RESPONSIBILITY: Raw CSV text -> CanonicalRecords -> store merge
ALLOWED INPUTS: CSV text, a catalog matcher, a record store
OUTPUTS: ImportResult (aggregate only)

WHAT THIS LAYER MUST NOT DO:
============================
- Derive display intervals
- Surface individual row failures to the caller
- Abort a batch because of one bad row
"""

from .csv_importer import CsvImporter, ParseReport, DroppedRow, CSV_SOURCE
from .service import ImportService

__all__ = [
    'CsvImporter',
    'ParseReport',
    'DroppedRow',
    'CSV_SOURCE',
    'ImportService',
]
