"""JSON field relay: forwards requests upstream and projects selected fields."""

__version__ = "0.1.0"
