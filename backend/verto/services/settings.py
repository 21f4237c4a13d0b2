"""User settings service.

Settings are persisted one row per key and handed to callers as an explicit
AppSettings value. Nothing reads settings from ambient global state.
"""

import logging
from dataclasses import dataclass, asdict, fields
from typing import Any, Dict

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..exceptions import InvalidSettingError
from ..models import Setting

logger = logging.getLogger(__name__)

CURRENCIES = ["USD", "EUR", "GBP", "JPY", "BTC", "ETH"]
REFRESH_RATE_OPTIONS = [5, 15, 30, 60, 300]


@dataclass(frozen=True)
class AppSettings:
    """User-facing preferences."""
    dark_mode: bool = False
    notifications_enabled: bool = True
    use_biometrics: bool = False
    currency: str = "USD"
    refresh_rate_seconds: int = 30

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


_FIELD_TYPES = {f.name: f.type for f in fields(AppSettings)}


def _validate(key: str, value: Any) -> Any:
    """Check a single setting and return it in its canonical type."""
    if key not in _FIELD_TYPES:
        raise InvalidSettingError(key)

    expected = _FIELD_TYPES[key]
    if expected in (bool, "bool"):
        if not isinstance(value, bool):
            raise InvalidSettingError(key, f"must be a boolean, got {type(value).__name__}")
        return value

    if key == "currency":
        currency = str(value).upper()
        if currency not in CURRENCIES:
            raise InvalidSettingError(key, f"must be one of {CURRENCIES}")
        return currency

    if key == "refresh_rate_seconds":
        if isinstance(value, bool) or not isinstance(value, (int, float)) or int(value) != value:
            raise InvalidSettingError(key, "must be a whole number of seconds")
        if int(value) not in REFRESH_RATE_OPTIONS:
            raise InvalidSettingError(key, f"must be one of {REFRESH_RATE_OPTIONS}")
        return int(value)

    return value


def _encode(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _decode(key: str, raw: str) -> Any:
    expected = _FIELD_TYPES[key]
    if expected in (bool, "bool"):
        return raw == "true"
    if expected in (int, "int"):
        return int(raw)
    return raw


class SettingsService:
    """Load and update persisted user settings."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_settings(self) -> AppSettings:
        """Return stored settings, with defaults for anything never set."""
        result = await self.session.execute(select(Setting))
        stored = {}
        for row in result.scalars().all():
            if row.key not in _FIELD_TYPES:
                logger.warning(f"Ignoring unknown stored setting '{row.key}'")
                continue
            try:
                stored[row.key] = _decode(row.key, row.value)
            except ValueError:
                logger.warning(f"Ignoring unreadable value for setting '{row.key}': {row.value!r}")
        return AppSettings(**stored)

    async def update_settings(self, **changes: Any) -> AppSettings:
        """Validate and persist changed settings.

        Raises:
            InvalidSettingError: If any key or value is not accepted. No
                change is written in that case.
        """
        validated = {key: _validate(key, value) for key, value in changes.items()}

        for key, value in validated.items():
            row = await self.session.get(Setting, key)
            if row is None:
                self.session.add(Setting(key=key, value=_encode(value)))
            else:
                row.value = _encode(value)

        await self.session.commit()
        if validated:
            logger.info(f"Updated settings: {', '.join(sorted(validated))}")
        return await self.get_settings()
