"""File-based tools for large data: external sort, rows to JSON, rotating queues and a key-value store."""

__version__ = "0.1.0"