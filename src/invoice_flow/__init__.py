"""Australian GST-aware invoice and quote generation."""

__version__ = "1.0.0"
