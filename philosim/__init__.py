"""Threaded dining philosophers simulation: argument parsing, table and command line."""

__version__ = "0.1.0"
__all__ = ["__version__"]