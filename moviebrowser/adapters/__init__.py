"""Adaptateurs d'infrastructure (API TMDB, CLI)."""
