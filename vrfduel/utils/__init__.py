"""
vrfduel.utils
-------------

Utility namespace for the duel protocol: byte guards, little-endian codecs
and hashing wrappers shared across the round components.

This package file deliberately avoids eager imports to keep dependency order
simple.
"""

__all__: list[str] = []
