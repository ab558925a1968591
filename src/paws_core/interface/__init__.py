"""Command-line interface for paws-core."""
