"""Custom-drawn candlestick chart widget."""

__version__ = "0.1.0"
