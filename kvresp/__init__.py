"""In-memory key-value store and RESP server: protocol, data types, store, commands."""

__version__ = "0.1.0"