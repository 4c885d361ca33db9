"""Input readers.

- reader: Image-analysis CSV exports
"""

from milo.ingest.reader import InputReadError, SampleCsvReader

__all__ = ["InputReadError", "SampleCsvReader"]
