"""Crisis map danger-zone evaluation."""

__version__ = "0.1.0"
