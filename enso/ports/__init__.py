"""Port interfaces (Hexagonal Architecture)."""

from enso.ports.outbound import EnsoPort

__all__ = ["EnsoPort"]
