"""Blob storage adapters.

Visit records live in a plain key/value blob store. The services depend on
the abstract interface only, so S3 can be swapped for the filesystem or an
in-memory dict without touching validation or counting logic.
"""
