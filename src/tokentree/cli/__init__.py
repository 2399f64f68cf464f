"""Command-line interface for tokentree."""
