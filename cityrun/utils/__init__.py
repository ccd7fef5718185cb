"""Utilities package: settings, logging setup, timing and small caches."""
__all__ = []
