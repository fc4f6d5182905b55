"""Enso: bundle composition and paginated catalog client for the Enso API."""

from enso.config import CONFIG, AppConfig
from enso.errors import DecodeFailure, EnsoError, TransportFailure
from enso.domain.bundle import Bundle
from enso.domain.models import (
    ACTION_CALL,
    ENSO_PROTOCOL,
    ActionSchema,
    IndexedOutput,
    Literal,
    PreviousOutput,
    ValueList,
)
from enso.adapters.api.client import EnsoClient, Version
from enso.adapters.api.pagination import PageResult, PaginatedFetcher

__all__ = [
    "CONFIG",
    "AppConfig",
    "DecodeFailure",
    "EnsoError",
    "TransportFailure",
    "Bundle",
    "ACTION_CALL",
    "ENSO_PROTOCOL",
    "ActionSchema",
    "IndexedOutput",
    "Literal",
    "PreviousOutput",
    "ValueList",
    "EnsoClient",
    "Version",
    "PageResult",
    "PaginatedFetcher",
]
