"""Audit curated repository link lists for stale GitHub repositories."""

__version__ = "0.1.0"
