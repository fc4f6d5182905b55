"""Outbound ports: interfaces for external system adapters."""

from typing import AsyncIterator, List, Protocol, Sequence, Tuple, runtime_checkable

from enso.domain.bundle import Bundle
from enso.domain.models import ActionSchema, Network
from enso.domain.models import Protocol as DefiProtocol


@runtime_checkable
class EnsoPort(Protocol):
    """Interface for the Enso aggregation API."""

    @property
    def is_configured(self) -> bool: ...

    async def get_networks(self) -> List[Network]: ...

    async def get_protocols(self) -> List[DefiProtocol]: ...

    async def get_actions(self) -> List[ActionSchema]: ...

    def tokens_stream(self, params: Sequence[Tuple[str, str]] = ()) -> AsyncIterator: ...

    async def send_bundle(self, bundle: Bundle, from_address: str) -> None: ...
