"""Crawl Intake - URL batch ingestion front-end of the crawl pipeline."""

__version__ = "0.1.0"
