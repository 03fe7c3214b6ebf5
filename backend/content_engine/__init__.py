"""Content Engine API — drafting, rewriting and analysis of investment text."""

__version__ = "1.0.0"
