"""CSV ingestion pipeline.

This package sanitizes, tokenizes, and date-parses delimited files.
It feeds typed rows into the time-series store.
"""
