"""Utility helpers: shared enumerations and logging configuration."""
