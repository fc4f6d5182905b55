"""Enso API client using aiohttp."""

import asyncio
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Tuple

import aiohttp

from enso.adapters.api.pagination import PaginatedFetcher
from enso.adapters.api.wire import (
    PageMeta,
    decode_token_addresses,
    parse_actions,
    parse_networks,
    parse_protocols,
    parse_tokens_page,
)
from enso.config import CONFIG
from enso.domain.bundle import Bundle
from enso.domain.models import ActionSchema, Network, Protocol
from enso.errors import DecodeFailure, TransportFailure

Params = Sequence[Tuple[str, str]]


class Version(Enum):
    V1 = "v1"


class EnsoClient:
    """Async Enso API client: catalogs, token pages and bundle submission.

    Every call opens its own session; failures raise TransportFailure or
    DecodeFailure and are never retried.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        version: Optional[Version] = None,
        api_address: Optional[str] = None,
    ):
        self.api_key = CONFIG["api_key"] if api_key is None else api_key
        self.version = version or Version(CONFIG["api_version"])
        self.api_address = (api_address or CONFIG["api_address"]).rstrip("/")

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    def get_api_url(self) -> str:
        return f"{self.api_address}/api/{self.version.value}"

    def _headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.api_key}"}

    async def _get_json(self, path: str, params: Params = (), what: str = "result") -> Any:
        url = f"{self.get_api_url()}{path}"
        try:
            async with aiohttp.ClientSession() as session:
                async with session.get(url, headers=self._headers(), params=list(params)) as resp:
                    if resp.status >= 400:
                        body = await resp.text()
                        raise TransportFailure(f"Couldn't get {what}: HTTP {resp.status}: {body}")
                    try:
                        return await resp.json()
                    except (aiohttp.ContentTypeError, ValueError) as e:
                        raise DecodeFailure(f"Couldn't parse result: {e}") from e
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise TransportFailure(f"Couldn't get {what}: {e}") from e

    async def get_networks(self) -> List[Network]:
        return parse_networks(await self._get_json("/networks", what="networks"))

    async def get_protocols(self) -> List[Protocol]:
        return parse_protocols(await self._get_json("/protocols", what="protocols"))

    async def get_actions(self) -> List[ActionSchema]:
        return parse_actions(await self._get_json("/actions", what="actions"))

    async def get_tokens(self, params: Params = ()) -> Tuple[PageMeta, List[str]]:
        """Fetch a single token page (pass ``("page", "n")`` to pick one)."""
        page = parse_tokens_page(await self._get_json("/tokens", params, what="tokens"))
        return page.meta, page.addresses

    def tokens_stream(self, params: Params = ()) -> PaginatedFetcher:
        """Token addresses, one page per pull."""
        return PaginatedFetcher(
            f"{self.get_api_url()}/tokens",
            headers=self._headers(),
            params=params,
            decode=decode_token_addresses,
        )

    async def send_bundle(self, bundle: Bundle, from_address: str) -> None:
        """Submit a bundle once. The response body is not consumed."""
        url = f"{self.get_api_url()}/shortcuts/bundle"
        params = [("chainId", str(bundle.chain_id)), ("fromAddress", from_address)]
        try:
            async with aiohttp.ClientSession() as session:
                async with session.post(
                    url, headers=self._headers(), params=params, json=bundle.serialize()
                ) as resp:
                    if resp.status >= 400:
                        body = await resp.text()
                        raise TransportFailure(
                            f"Couldn't send transaction: HTTP {resp.status}: {body}"
                        )
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise TransportFailure(f"Couldn't send transaction: {e}") from e
