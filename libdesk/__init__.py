"""Console library desk keeping staff accounts, books, members, loans and fines in CSV files."""

__version__ = "0.1.0"