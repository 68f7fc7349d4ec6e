"""Snapshot storage layer.

This package reads and atomically rewrites per-region snapshot files
and owns the persisted JSON record format.
"""
