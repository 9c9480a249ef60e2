"""Audit engine: signal sources, category scorers, aggregation and recommendations."""
