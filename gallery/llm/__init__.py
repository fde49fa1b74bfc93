"""Boundary to the AI extraction provider."""
