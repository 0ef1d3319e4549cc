"""Couche infrastructure (persistance)."""
