"""Stale repository detection, deduplication and reporting."""
