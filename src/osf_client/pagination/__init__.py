"""Pagination over JSON:API collections."""

from osf_client.pagination.paginated import PageFetcher, PaginatedResult

__all__ = ["PageFetcher", "PaginatedResult"]
