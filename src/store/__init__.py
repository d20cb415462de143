"""In-memory time-series storage layer.

This package holds per-timestamp observation tables and the ordered store.
It powers point lookups, pruning, and gap filling for the SDK.
"""
