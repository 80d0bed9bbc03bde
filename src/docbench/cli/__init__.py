"""Command-line interface for docbench."""
