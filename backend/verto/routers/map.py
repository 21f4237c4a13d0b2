"""Crypto map demo router."""

from dataclasses import asdict
from fastapi import APIRouter, HTTPException

from ..services.crypto_map import find_city, get_map

router = APIRouter()


@router.get("")
async def get_crypto_map():
    """Get the map region and city pins."""
    return get_map()


@router.get("/cities/{name}")
async def get_city(name: str):
    """Get one city pin by name."""
    city = find_city(name)
    if city is None:
        raise HTTPException(status_code=404, detail=f"City '{name}' not found")
    return asdict(city)
