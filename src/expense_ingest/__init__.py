"""Transaction ingestion: parse, categorize and import expenses."""

__version__ = "0.1.0"
