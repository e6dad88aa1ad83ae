"""Errors raised by the persistence services."""


class StoreError(Exception):
    """A store read or write failed (I/O, network, or backend error)."""
