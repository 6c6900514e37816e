"""Senyas backend package."""
