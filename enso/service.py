"""Request dispatch between a front end and the Enso API."""

import asyncio
import sys
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple, Union

from enso.config import CONFIG
from enso.domain.bundle import Bundle
from enso.domain.models import ActionSchema, Network, ParamValue, Protocol
from enso.errors import EnsoError
from enso.ports.outbound import EnsoPort


def _log(msg: str):
    print(msg, file=sys.stderr)


# Consecutive failures of one token page before collect_tokens stops
MAX_PAGE_FAILURES = 3

# (schema, protocol, args) as composed by a front end
DataTransaction = Tuple[ActionSchema, Protocol, Sequence[ParamValue]]


# ── Requests ────────────────────────────────────────────────


@dataclass
class GetNetworks:
    pass


@dataclass
class SetNetwork:
    chain_id: int


@dataclass
class GetTokens:
    pass


@dataclass
class GetProtocols:
    pass


@dataclass
class GetActions:
    pass


@dataclass
class SendBundle:
    transactions: List[DataTransaction] = field(default_factory=list)


@dataclass
class Quit:
    pass


Request = Union[GetNetworks, SetNetwork, GetTokens, GetProtocols, GetActions, SendBundle, Quit]


# ── Responses ───────────────────────────────────────────────


@dataclass
class NetworksResponse:
    networks: List[Network]


@dataclass
class TokensResponse:
    tokens: List[str]
    failed_pages: int = 0


@dataclass
class ProtocolsResponse:
    protocols: List[Protocol]


@dataclass
class ActionsResponse:
    actions: List[ActionSchema]


@dataclass
class BundleSent:
    success: bool
    chain_id: int
    transactions: int
    error: Optional[str] = None


Response = Union[NetworksResponse, TokensResponse, ProtocolsResponse, ActionsResponse, BundleSent]


class EnsoService:
    """Owns the API client and the selected chain."""

    def __init__(self, client: EnsoPort, from_address: Optional[str] = None):
        self.client = client
        self.from_address = CONFIG["from_address"] if from_address is None else from_address
        self.chain_id: Optional[int] = None

    @property
    def active_chain_id(self) -> int:
        if self.chain_id is None:
            return CONFIG["default_chain_id"]
        return self.chain_id

    async def collect_tokens(self, chain_id: Optional[int] = None) -> TokensResponse:
        """Drain the token stream for a chain.

        The stream retries a failed page on the next pull, so draining stops
        once the same page has failed MAX_PAGE_FAILURES times in a row and
        whatever was collected so far is returned.
        """
        if chain_id is None:
            chain_id = self.active_chain_id
        tokens: List[str] = []
        failed = 0
        consecutive = 0
        async for page in self.client.tokens_stream([("chainId", str(chain_id))]):
            if page.success:
                tokens.extend(page.entries)
                consecutive = 0
                continue
            failed += 1
            consecutive += 1
            _log(f"Token page {page.page} failed: {page.error}")
            if consecutive >= MAX_PAGE_FAILURES:
                _log(f"Giving up on token page {page.page} after {consecutive} failures")
                break
        return TokensResponse(tokens=tokens, failed_pages=failed)

    def build_bundle(
        self, transactions: Sequence[DataTransaction], chain_id: Optional[int] = None
    ) -> Bundle:
        bundle = Bundle(self.active_chain_id if chain_id is None else chain_id)
        for schema, protocol, args in transactions:
            bundle.add_action(protocol, schema, args)
        return bundle

    async def send_bundle(
        self,
        transactions: Sequence[DataTransaction],
        chain_id: Optional[int] = None,
        from_address: Optional[str] = None,
    ) -> BundleSent:
        bundle = self.build_bundle(transactions, chain_id)
        try:
            await self.client.send_bundle(bundle, from_address or self.from_address)
        except EnsoError as e:
            _log(f"Bundle submission failed: {e}")
            return BundleSent(False, bundle.chain_id, len(bundle), error=str(e))
        return BundleSent(True, bundle.chain_id, len(bundle))

    async def handle(self, request: Request) -> Optional[Response]:
        """Process one request. Returns None when there is nothing to send back."""
        if isinstance(request, GetNetworks):
            return NetworksResponse(await self.client.get_networks())
        if isinstance(request, SetNetwork):
            self.chain_id = request.chain_id
            return None
        if isinstance(request, GetTokens):
            return await self.collect_tokens()
        if isinstance(request, GetProtocols):
            return ProtocolsResponse(await self.client.get_protocols())
        if isinstance(request, GetActions):
            return ActionsResponse(await self.client.get_actions())
        if isinstance(request, SendBundle):
            return await self.send_bundle(request.transactions)
        return None

    async def run(self, requests: asyncio.Queue, responses: asyncio.Queue) -> None:
        """Serve requests until Quit or a None sentinel arrives."""
        while True:
            request = await requests.get()
            if request is None or isinstance(request, Quit):
                break
            try:
                response = await self.handle(request)
            except EnsoError as e:
                _log(f"{type(request).__name__} failed: {e}")
                continue
            if response is not None:
                await responses.put(response)
