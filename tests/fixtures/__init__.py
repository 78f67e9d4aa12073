"""Test fixtures for spacrawl."""
