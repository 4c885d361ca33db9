"""`Milo` - grid measurement summary reports for split-sample image batches.

Subpackages:
- samples: Measurement records, sample-order classification, sample ids
- report: Ragged table assembly, statistics, workbook rendering
- ingest: CSV export reader
- pipeline: Batch report orchestrator
"""

__version__ = "0.1.0"
