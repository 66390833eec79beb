"""Aggregation module for trade history.

- Reads the trade store and produces grouped patterns and statistics
- Forbidden: store mutation
"""
