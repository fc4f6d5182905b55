"""Pull-based paginated fetching using aiohttp.

One page per pull, one request in flight. The page count is unknown until
a page decodes successfully; failed pages are yielded as error results and
the next pull retries the same page.
"""

import asyncio
import sys
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

import aiohttp

from enso.adapters.api.wire import decode_token_addresses
from enso.errors import DecodeFailure, EnsoError, TransportFailure

PageDecoder = Callable[[Any], Tuple[List[Any], int]]


def _log(msg: str):
    print(msg, file=sys.stderr)


class FetchPhase(Enum):
    IDLE = "idle"
    AWAITING_RESPONSE = "awaiting_response"
    AWAITING_DECODE = "awaiting_decode"


@dataclass
class PageResult:
    success: bool
    page: int
    entries: List[Any] = field(default_factory=list)
    error: Optional[EnsoError] = None


class PaginatedFetcher:
    """Async iterator over the pages of a paginated endpoint."""

    def __init__(
        self,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        params: Sequence[Tuple[str, str]] = (),
        decode: PageDecoder = decode_token_addresses,
    ):
        self.url = url
        self.headers = dict(headers or {})
        self.params = list(params)
        self.decode = decode
        self.cursor = 0
        self.total_pages: Optional[int] = None
        self.phase = FetchPhase.IDLE

    @property
    def exhausted(self) -> bool:
        return self.total_pages is not None and self.cursor >= self.total_pages

    def __aiter__(self) -> "PaginatedFetcher":
        return self

    async def __anext__(self) -> PageResult:
        if self.phase is not FetchPhase.IDLE:
            raise RuntimeError("A page request is already in flight")
        if self.exhausted:
            raise StopAsyncIteration
        try:
            return await self._fetch_page(self.cursor + 1)
        finally:
            self.phase = FetchPhase.IDLE

    async def _fetch_page(self, page: int) -> PageResult:
        params = self.params + [("page", str(page))]
        self.phase = FetchPhase.AWAITING_RESPONSE
        try:
            async with aiohttp.ClientSession() as session:
                async with session.get(self.url, headers=self.headers, params=params) as resp:
                    if resp.status >= 400:
                        body = await resp.text()
                        return self._failed(
                            page, TransportFailure(f"Couldn't get page {page}: HTTP {resp.status}: {body}")
                        )
                    self.phase = FetchPhase.AWAITING_DECODE
                    try:
                        payload = await resp.json()
                        entries, last_page = self.decode(payload)
                    except DecodeFailure as e:
                        return self._failed(page, e)
                    except (aiohttp.ContentTypeError, KeyError, TypeError, IndexError, ValueError) as e:
                        return self._failed(page, DecodeFailure(f"Couldn't parse result: {e}"))
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            return self._failed(page, TransportFailure(f"Couldn't get page {page}: {e}"))

        self.total_pages = last_page
        self.cursor = page
        return PageResult(success=True, page=page, entries=entries)

    def _failed(self, page: int, error: EnsoError) -> PageResult:
        _log(f"Page {page} of {self.url} failed: {error}")
        return PageResult(success=False, page=page, error=error)
