"""spacrawl: render and extract the structure of single-page applications."""

__version__ = "0.1.0"
