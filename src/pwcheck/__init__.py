"""Concurrent password validation with a durable result log."""

__version__ = "0.1.0"
