"""Enso API routes: catalogs, tokens and bundle submission."""

from typing import Annotated, Any, Dict, List, Optional, Union
from typing import Literal as Kind

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from enso.adapters.api.client import EnsoClient
from enso.domain.models import (
    ACTION_CALL,
    ActionSchema,
    IndexedOutput,
    Literal,
    ParamValue,
    PreviousOutput,
    Protocol,
    ValueList,
)
from enso.domain.models import ENSO_PROTOCOL
from enso.errors import EnsoError
from enso.service import DataTransaction, EnsoService

enso_router = APIRouter(prefix="/enso", tags=["Enso"])

enso_client = EnsoClient()
service = EnsoService(enso_client)


# ── Param values: {"kind": ...} tagged union ───────────────


class LiteralParam(BaseModel):
    kind: Kind["literal"]
    value: str


class PreviousParam(BaseModel):
    kind: Kind["previous"]


class IndexedParam(BaseModel):
    kind: Kind["indexed"]
    index: int


class ListParam(BaseModel):
    kind: Kind["list"]
    items: List["ParamIn"] = []


ParamIn = Annotated[
    Union[LiteralParam, PreviousParam, IndexedParam, ListParam],
    Field(discriminator="kind"),
]

ListParam.model_rebuild()


def to_param_value(param: BaseModel) -> ParamValue:
    if isinstance(param, LiteralParam):
        return Literal(param.value)
    if isinstance(param, PreviousParam):
        return PreviousOutput()
    if isinstance(param, IndexedParam):
        return IndexedOutput(param.index)
    return ValueList([to_param_value(item) for item in param.items])


class TransactionIn(BaseModel):
    protocol: str = ENSO_PROTOCOL.slug
    action: str
    # Parameter names in binding order; looked up in the catalog when omitted
    inputs: Optional[List[str]] = None
    args: List[ParamIn] = []


class BundleIn(BaseModel):
    chain_id: Optional[int] = None
    from_address: Optional[str] = None
    transactions: List[TransactionIn]


class ActionOut(BaseModel):
    action: str
    inputs: Dict[str, str]


class TokensOut(BaseModel):
    chain_id: int
    tokens: List[str]
    failed_pages: int = 0


class BundlePreviewOut(BaseModel):
    chain_id: int
    bundle: List[Dict[str, Any]]


class BundleSentOut(BaseModel):
    success: bool
    chain_id: int
    transactions: int
    error: Optional[str] = None


def _require_configured():
    if not enso_client.is_configured:
        raise HTTPException(status_code=503, detail="Enso API key not configured")


async def _resolve_transactions(body: BundleIn) -> List[DataTransaction]:
    catalog: Optional[Dict[str, ActionSchema]] = None
    resolved: List[DataTransaction] = []
    for tx in body.transactions:
        if tx.inputs is not None:
            schema = ActionSchema(tx.action, tuple((name, "") for name in tx.inputs))
        elif tx.action == ACTION_CALL.name:
            schema = ACTION_CALL
        else:
            if catalog is None:
                _require_configured()
                catalog = {a.name: a for a in await enso_client.get_actions()}
            if tx.action not in catalog:
                raise HTTPException(status_code=404, detail=f"Unknown action: {tx.action}")
            schema = catalog[tx.action]
        protocol = ENSO_PROTOCOL if tx.protocol == ENSO_PROTOCOL.slug else Protocol(tx.protocol)
        resolved.append((schema, protocol, [to_param_value(arg) for arg in tx.args]))
    return resolved


@enso_router.get("/networks")
async def networks():
    _require_configured()
    try:
        return [{"id": n.id, "name": n.name} for n in await enso_client.get_networks()]
    except EnsoError as e:
        raise HTTPException(status_code=502, detail=str(e))


@enso_router.get("/protocols")
async def protocols():
    _require_configured()
    try:
        return [{"slug": p.slug, "url": p.url} for p in await enso_client.get_protocols()]
    except EnsoError as e:
        raise HTTPException(status_code=502, detail=str(e))


@enso_router.get("/actions", response_model=List[ActionOut])
async def actions():
    _require_configured()
    try:
        catalog = await enso_client.get_actions()
    except EnsoError as e:
        raise HTTPException(status_code=502, detail=str(e))
    return [ActionOut(action=a.name, inputs=dict(a.parameters)) for a in catalog]


@enso_router.get("/tokens", response_model=TokensOut)
async def tokens(chain_id: Optional[int] = None):
    _require_configured()
    chain_id = service.active_chain_id if chain_id is None else chain_id
    result = await service.collect_tokens(chain_id)
    return TokensOut(chain_id=chain_id, tokens=result.tokens, failed_pages=result.failed_pages)


@enso_router.post("/bundle/preview", response_model=BundlePreviewOut)
async def bundle_preview(body: BundleIn):
    try:
        transactions = await _resolve_transactions(body)
    except EnsoError as e:
        raise HTTPException(status_code=502, detail=str(e))
    bundle = service.build_bundle(transactions, body.chain_id)
    return BundlePreviewOut(chain_id=bundle.chain_id, bundle=bundle.serialize())


@enso_router.post("/bundle", response_model=BundleSentOut)
async def bundle_send(body: BundleIn):
    _require_configured()
    try:
        transactions = await _resolve_transactions(body)
    except EnsoError as e:
        raise HTTPException(status_code=502, detail=str(e))
    result = await service.send_bundle(transactions, body.chain_id, body.from_address)
    return BundleSentOut(**result.__dict__)
