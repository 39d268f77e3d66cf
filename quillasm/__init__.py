"""Macro expansion, first-pass analysis and 14-bit word encoding for a teaching machine's assembly."""

__version__ = "0.1.0"
__all__ = ["__version__"]