"""Compatibility shims for third-party API differences."""
