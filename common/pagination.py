"""Shared pagination for list endpoints."""

from rest_framework.pagination import PageNumberPagination


class StandardPagination(PageNumberPagination):
    """Page-number pagination with an adjustable page size via `limit`."""

    page_size = 10
    page_size_query_param = "limit"
    max_page_size = 100


class LargePagination(StandardPagination):
    """Used by admin lists, which default to 20 rows per page."""

    page_size = 20


class ChatPagination(StandardPagination):
    """Chat history loads 50 messages per page."""

    page_size = 50
    max_page_size = 200
