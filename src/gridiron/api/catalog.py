"""Expansion catalog API endpoints."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException

from gridiron.api.deps import CatalogDep
from gridiron.core.catalog import RELOCATION_CITIES

router = APIRouter(prefix="/api/expansion", tags=["expansion"])


@router.get("/catalog")
async def list_catalog(catalog: CatalogDep) -> dict:
    """List every expansion team definition."""
    return {"data": [entry.model_dump() for entry in catalog]}


@router.get("/catalog/{name}")
async def get_catalog_entry(name: str, catalog: CatalogDep) -> dict:
    """Get one expansion team definition by exact name."""
    entry = catalog.get(name)
    if entry is None:
        raise HTTPException(404, "Expansion team not found")
    return {"data": entry.model_dump()}


@router.get("/relocation-cities")
async def list_relocation_cities() -> dict:
    return {"data": list(RELOCATION_CITIES)}
