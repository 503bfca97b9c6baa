"""Operational scripts (admin command line)."""
