"""Domain layer: pure Python, no framework dependencies."""

from enso.domain.models import (
    ACTION_CALL,
    ENSO_PROTOCOL,
    ActionSchema,
    IndexedOutput,
    Literal,
    Network,
    ParamValue,
    PreviousOutput,
    Protocol,
    Transaction,
    ValueList,
)
from enso.domain.bundle import Bundle, resolve_param, output_of_call_at

__all__ = [
    "ACTION_CALL",
    "ENSO_PROTOCOL",
    "ActionSchema",
    "IndexedOutput",
    "Literal",
    "Network",
    "ParamValue",
    "PreviousOutput",
    "Protocol",
    "Transaction",
    "ValueList",
    "Bundle",
    "resolve_param",
    "output_of_call_at",
]
