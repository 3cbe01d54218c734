"""Context-sensitive go to definition / find references."""

__version__ = "0.1.0"
