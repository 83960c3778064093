"""Prefix command dispatching for hikari bots."""

__version__ = "1.0.0"
