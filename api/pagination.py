from __future__ import annotations

from rest_framework.pagination import PageNumberPagination


class DefaultPagination(PageNumberPagination):
    """Page-number pagination; clients may ask for `?page_size=N` up to 100."""

    page_size = 20
    page_size_query_param = "page_size"
    max_page_size = 100
