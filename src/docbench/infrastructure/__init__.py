"""Adapters for output normalization and artifact persistence."""
