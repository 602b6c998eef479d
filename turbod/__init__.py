"""turbod: find and connect to the per-repository build daemon."""

__version__ = "0.1.0"
