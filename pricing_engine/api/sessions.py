import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Header, HTTPException
from pydantic import ValidationError

from pricing_engine.core.dependencies import get_config_provider, get_session_store
from pricing_engine.core.enums import QuoteField
from pricing_engine.core.errors import check_not_found, resolve_calculator
from pricing_engine.core.response_builders import build_session_response
from pricing_engine.schemas.quote import AcceptResponse, OverrideValue, SessionCreate, SessionResponse
from pricing_engine.services.config_loader import ConfigurationProvider
from pricing_engine.services.session import QuoteSession, SessionStore
from pricing_engine.services.tasks import deliver_accepted_quote
from pricing_engine.utils.hashing import payload_hash
from pricing_engine.utils.idempotency import get_idempotent, set_idempotent

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/sessions", tags=["sessions"])


def _get_session(session_id: str, store: SessionStore) -> QuoteSession:
    session = store.get(session_id)
    check_not_found(session, "Quote session", session_id)
    return session


@router.post("", response_model=SessionResponse, status_code=201)
async def create_session(
    payload: SessionCreate,
    provider: ConfigurationProvider = Depends(get_config_provider),
    store: SessionStore = Depends(get_session_store),
):
    resolve_calculator(payload.service_id)
    session = store.create(payload.service_id, provider, payload.inputs)
    await session.load_config()
    return build_session_response(session)


@router.get("/{session_id}", response_model=SessionResponse)
async def get_session(session_id: str, store: SessionStore = Depends(get_session_store)):
    return build_session_response(_get_session(session_id, store))


@router.patch("/{session_id}/inputs", response_model=SessionResponse)
async def update_inputs(
    session_id: str,
    patch: Dict[str, Any] = Body(...),
    store: SessionStore = Depends(get_session_store),
):
    session = _get_session(session_id, store)
    session.update_inputs(patch)
    return build_session_response(session)


@router.patch("/{session_id}/rates", response_model=SessionResponse)
async def edit_rates(
    session_id: str,
    patch: Dict[str, Any] = Body(...),
    store: SessionStore = Depends(get_session_store),
):
    session = _get_session(session_id, store)
    try:
        session.edit_config(patch)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors(include_url=False))
    return build_session_response(session)


@router.put("/{session_id}/overrides/{field}", response_model=SessionResponse)
async def set_override(
    session_id: str,
    field: QuoteField,
    payload: OverrideValue,
    store: SessionStore = Depends(get_session_store),
):
    session = _get_session(session_id, store)
    session.set_override(field, payload.value)
    return build_session_response(session)


@router.delete("/{session_id}/overrides/{field}", response_model=SessionResponse)
async def clear_override(
    session_id: str,
    field: QuoteField,
    store: SessionStore = Depends(get_session_store),
):
    session = _get_session(session_id, store)
    session.clear_override(field)
    return build_session_response(session)


@router.post("/{session_id}/config/refresh", response_model=SessionResponse)
async def refresh_config(session_id: str, store: SessionStore = Depends(get_session_store)):
    session = _get_session(session_id, store)
    await session.refresh_config()
    return build_session_response(session)


@router.post("/{session_id}/accept", response_model=AcceptResponse)
async def accept_quote(
    session_id: str,
    idempotency_key: Optional[str] = Header(None),
    store: SessionStore = Depends(get_session_store),
):
    session = _get_session(session_id, store)

    if idempotency_key:
        prev = await get_idempotent(idempotency_key)
        if prev:
            return AcceptResponse(**{**prev, "idempotent_replay": True})

    payload = session.handoff_payload()
    deliver_accepted_quote.delay(payload)
    store.mark_accepted(session)
    logger.info(f"Quote session {session_id} accepted for {session.service_id}")

    out = AcceptResponse(session_id=session_id, status="queued", payload_hash=payload_hash(payload))
    if idempotency_key:
        await set_idempotent(idempotency_key, out.model_dump())
    return out


@router.delete("/{session_id}", status_code=204)
async def delete_session(session_id: str, store: SessionStore = Depends(get_session_store)):
    check_not_found(store.delete(session_id), "Quote session", session_id)
