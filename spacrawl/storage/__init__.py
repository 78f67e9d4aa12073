"""Persistence of crawl results."""
