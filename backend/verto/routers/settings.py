"""User settings API router."""

from typing import Literal, Optional
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from pydantic import BaseModel

from ..exceptions import InvalidSettingError
from ..models import get_session
from ..services.settings import CURRENCIES, REFRESH_RATE_OPTIONS, SettingsService

router = APIRouter()


class SettingsUpdate(BaseModel):
    """Partial settings update; omitted fields are left unchanged."""
    dark_mode: Optional[bool] = None
    notifications_enabled: Optional[bool] = None
    use_biometrics: Optional[bool] = None
    currency: Optional[Literal[tuple(CURRENCIES)]] = None
    refresh_rate_seconds: Optional[Literal[tuple(REFRESH_RATE_OPTIONS)]] = None


@router.get("")
async def get_settings(session: AsyncSession = Depends(get_session)):
    """Get current settings."""
    settings = await SettingsService(session).get_settings()
    return settings.to_dict()


@router.put("")
async def update_settings(
    request: SettingsUpdate,
    session: AsyncSession = Depends(get_session),
):
    """Update one or more settings."""
    changes = request.model_dump(exclude_none=True)
    try:
        settings = await SettingsService(session).update_settings(**changes)
    except InvalidSettingError as e:
        raise HTTPException(status_code=400, detail=e.message)
    return settings.to_dict()
