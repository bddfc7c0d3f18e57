"""Exclusive sum-of-products forms of Boolean functions."""
try:
    from esop._version import version as __version__
except ImportError:
    __version__ = None
