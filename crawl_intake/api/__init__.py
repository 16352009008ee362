"""HTTP surface of the ingestion service."""

from .app import create_app

__all__ = ["create_app"]
