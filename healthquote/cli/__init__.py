"""Command line interface for healthquote."""
