"""Command-line interface for spacrawl."""
