"""shelfctl: in-memory book catalog with title-indexed search."""

__version__ = "0.1.0"
