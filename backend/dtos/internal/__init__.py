"""
Internal DTOs

DTOs for service-to-service communication within the backend.
These are not exposed to external APIs.
"""

from .page import SortOrder, PageRequest, Page

__all__ = ["SortOrder", "PageRequest", "Page"]
