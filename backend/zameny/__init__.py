"""Parser and service layer for college schedule replacement bulletins."""

__version__ = "0.1.0"
