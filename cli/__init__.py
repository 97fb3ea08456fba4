"""Command line interface for the Lona converter."""
