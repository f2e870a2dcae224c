"""Command-line interface for gitwrap."""
