# chargingcloud/api/api/discovery.py
"""
Root-level health endpoint.
"""
from __future__ import annotations

from fastapi import APIRouter, Request

router = APIRouter()


@router.get("/health")
async def health(request: Request) -> dict:
    store = getattr(request.app.state, "store", None)
    return {
        "status": "healthy",
        "roaming_networks": len(store) if store is not None else 0,
    }
