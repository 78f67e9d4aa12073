"""Core configuration, logging and shared utilities."""
