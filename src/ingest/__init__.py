"""Region ingest and reconciliation.

This package reads region id lists and converges each region snapshot
on its list, fetching only ids the snapshot does not hold yet.
"""
