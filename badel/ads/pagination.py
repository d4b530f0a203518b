from rest_framework.pagination import PageNumberPagination


class AdPagination(PageNumberPagination):
    """Page-number pagination for owner and moderator ad lists (store-backed)."""
    page_size = 20                      # default items per page
    page_size_query_param = 'limit'     # allow ?limit=
    max_page_size = 100                 # safety cap
