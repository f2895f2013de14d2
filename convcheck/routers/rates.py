from __future__ import annotations

import secrets
from typing import Dict, Optional

from fastapi import APIRouter, Depends, Header, HTTPException, Request
from pydantic import BaseModel, Field

from convcheck.core.config import Settings
from convcheck.services.rates.stub_store import RateStore

"""Rate stub router.

Endpoints:
    - GET /rates                -> {"base": ..., "rates": {code: rate}}
    - PUT /rates/{currency}     -> set one rate {rate}
    - DELETE /rates/{currency}  -> drop one rate

Serves the same JSON shape and credential check as the real rate endpoint, so
the harness can run against a local, controllable table.
"""

router = APIRouter(prefix="/rates", tags=["rates"])


def get_store(request: Request) -> RateStore:
    return request.app.state.rate_store


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def require_credential(
    authorization: Optional[str] = Header(None),
    settings: Settings = Depends(get_app_settings),
):
    expected = settings.auth_header()
    if expected is None:
        return True
    if authorization is None or not secrets.compare_digest(
        authorization.encode("utf-8"), expected.encode("utf-8")
    ):
        raise HTTPException(
            status_code=401,
            detail="invalid or missing credential",
            headers={"WWW-Authenticate": settings.api_auth_scheme},
        )
    return True


class RateSetPayload(BaseModel):
    rate: float = Field(..., gt=0, description="Units of currency per 1 unit of base")


@router.get("", summary="Current rate table")
async def get_rates(
    _: bool = Depends(require_credential),
    store: RateStore = Depends(get_store),
):
    table = store.snapshot()
    return {"base": table.base, "rates": table.rates}


@router.put("/{currency}", summary="Set one rate")
async def set_rate(
    currency: str,
    payload: RateSetPayload,
    _: bool = Depends(require_credential),
    store: RateStore = Depends(get_store),
) -> Dict[str, object]:
    try:
        store.set_rate(currency, payload.rate)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    return {"status": "ok", "currency": currency.upper(), "rate": payload.rate}


@router.delete("/{currency}", summary="Remove one rate")
async def remove_rate(
    currency: str,
    _: bool = Depends(require_credential),
    store: RateStore = Depends(get_store),
):
    if not store.remove_rate(currency):
        raise HTTPException(status_code=404, detail="rate not found")
    return {"status": "deleted", "currency": currency.upper()}
