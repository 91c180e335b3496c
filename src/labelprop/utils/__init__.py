"""Utility packages."""
