"""Helpers shared by entry points."""
