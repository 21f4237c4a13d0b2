"""Configuration router: selectable options and app information."""

from typing import List
from fastapi import APIRouter
from pydantic import BaseModel

from .. import __version__
from ..services.market_data import Interval
from ..services.market_list import SortOption
from ..services.settings import CURRENCIES, REFRESH_RATE_OPTIONS

router = APIRouter()


class IntervalInfo(BaseModel):
    """Schema for a chart interval."""
    name: str
    days: str


class OptionsResponse(BaseModel):
    """Choices offered by the pickers of each screen."""
    sort_options: List[str]
    intervals: List[IntervalInfo]
    currencies: List[str]
    refresh_rates: List[int]


class AboutResponse(BaseModel):
    """Schema for app information."""
    name: str
    version: str
    disclaimer: str
    support_email: str


ABOUT = AboutResponse(
    name="Verto Crypto App",
    version=__version__,
    disclaimer=(
        "This app is for informational purposes only and does not "
        "constitute financial advice."
    ),
    support_email="support@verto.app",
)


@router.get("/options", response_model=OptionsResponse)
async def get_options():
    """Get sort options, chart intervals, currencies and refresh rates."""
    return OptionsResponse(
        sort_options=[option.value for option in SortOption],
        intervals=[IntervalInfo(name=i.value, days=i.days_param) for i in Interval],
        currencies=CURRENCIES,
        refresh_rates=REFRESH_RATE_OPTIONS,
    )


@router.get("/about", response_model=AboutResponse)
async def get_about():
    """Get app name, version and disclaimer."""
    return ABOUT
