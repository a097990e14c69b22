"""Find exported Go declarations that nothing else in the project references."""

__version__ = "0.1.0"
