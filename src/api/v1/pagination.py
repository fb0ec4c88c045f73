"""Pagination utilities for API v1."""

from rest_framework.pagination import PageNumberPagination


class StandardResultsSetPagination(PageNumberPagination):
    """Page number pagination; income lists can grow long within a month."""

    page_size = 50
    page_size_query_param = "page_size"
    max_page_size = 500
