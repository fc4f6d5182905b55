"""Enso API payload models and decoders (pydantic)."""

from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from enso.domain.models import ActionSchema, Network, Protocol
from enso.errors import DecodeFailure


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class TokenModel(_WireModel):
    chain_id: int = Field(alias="chainId")
    address: str
    kind: str = Field(alias="type")
    protocol_slug: str = Field(alias="protocolSlug")
    underlying_tokens: List[str] = Field(alias="underlyingTokens")
    primary_address: str = Field(alias="primaryAddress")


class PageMeta(_WireModel):
    total: int
    last_page: int = Field(alias="lastPage")
    current_page: int = Field(alias="currentPage")
    per_page: int = Field(alias="perPage")
    prev: Optional[int] = None
    next: Optional[int] = None


class TokensPage(_WireModel):
    meta: PageMeta
    data: List[TokenModel]

    @property
    def addresses(self) -> List[str]:
        return [token.address for token in self.data]


class NetworkModel(_WireModel):
    id: int
    name: str


class ProtocolModel(_WireModel):
    slug: str
    url: str


class ActionModel(_WireModel):
    action: str
    inputs: Dict[str, Any]


def _parse_error(e: Exception) -> DecodeFailure:
    return DecodeFailure(f"Couldn't parse result: {e}")


def parse_tokens_page(payload: Any) -> TokensPage:
    try:
        return TokensPage.model_validate(payload)
    except ValidationError as e:
        raise _parse_error(e) from e


def decode_token_addresses(payload: Any) -> Tuple[List[str], int]:
    """Page decoder for token lists: (addresses, last page)."""
    page = parse_tokens_page(payload)
    return page.addresses, page.meta.last_page


def parse_networks(payload: Any) -> List[Network]:
    try:
        items = [NetworkModel.model_validate(item) for item in _as_list(payload)]
    except ValidationError as e:
        raise _parse_error(e) from e
    return [Network(id=item.id, name=item.name) for item in items]


def parse_protocols(payload: Any) -> List[Protocol]:
    try:
        items = [ProtocolModel.model_validate(item) for item in _as_list(payload)]
    except ValidationError as e:
        raise _parse_error(e) from e
    return [Protocol(slug=item.slug, url=item.url) for item in items]


def parse_actions(payload: Any) -> List[ActionSchema]:
    """Decode the action catalog.

    The key order of each ``inputs`` object is the positional binding order
    for that action, so it is kept exactly as received.
    """
    try:
        items = [ActionModel.model_validate(item) for item in _as_list(payload)]
    except ValidationError as e:
        raise _parse_error(e) from e
    return [
        ActionSchema(
            name=item.action,
            parameters=tuple(
                (name, desc if isinstance(desc, str) else "")
                for name, desc in item.inputs.items()
            ),
        )
        for item in items
    ]


def _as_list(payload: Any) -> list:
    if not isinstance(payload, list):
        raise DecodeFailure(f"Couldn't parse result: expected a list, got {type(payload).__name__}")
    return payload
