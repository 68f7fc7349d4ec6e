"""Remote photo service access.

This package wraps the Flickr REST API behind a rate-limited client
that every region reconciliation shares.
"""
