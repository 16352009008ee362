"""Domain models for the crawl intake service."""

from .models import INVALID_ID, Job, QueueWorkItem, URLRecord

__all__ = ["INVALID_ID", "Job", "QueueWorkItem", "URLRecord"]
