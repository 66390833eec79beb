"""API module for Trade Check.

- Validates inputs, reads/writes the trade store
- Returns payloads for UI
- Forbidden: matching or aggregation logic of its own
"""
