"""Logging and settings helpers."""
