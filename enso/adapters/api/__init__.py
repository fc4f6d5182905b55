"""Enso API adapters: HTTP client, pagination and payload decoding."""

from enso.adapters.api.client import EnsoClient, Version
from enso.adapters.api.pagination import FetchPhase, PageResult, PaginatedFetcher
from enso.adapters.api.wire import PageMeta, TokensPage

__all__ = [
    "EnsoClient",
    "Version",
    "FetchPhase",
    "PageResult",
    "PaginatedFetcher",
    "PageMeta",
    "TokensPage",
]
