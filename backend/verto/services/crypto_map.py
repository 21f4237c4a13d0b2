"""Static demo data for the crypto trading activity map."""

from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class Coordinate:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class MapRegion:
    """Visible map area: a center point and its latitude/longitude span."""
    center: Coordinate
    latitude_delta: float
    longitude_delta: float


@dataclass(frozen=True)
class CryptoCity:
    """A city pin with a display label for its trading volume."""
    name: str
    coordinate: Coordinate
    volume: str


DEFAULT_REGION = MapRegion(
    center=Coordinate(latitude=20, longitude=0),
    latitude_delta=80,
    longitude_delta=180,
)

CITIES: List[CryptoCity] = [
    CryptoCity(name="New York", coordinate=Coordinate(40.7128, -74.0060), volume="$2.1B"),
    CryptoCity(name="London", coordinate=Coordinate(51.5074, -0.1278), volume="$1.7B"),
    CryptoCity(name="Tokyo", coordinate=Coordinate(35.6895, 139.6917), volume="$2.5B"),
    CryptoCity(name="Singapore", coordinate=Coordinate(1.3521, 103.8198), volume="$1.2B"),
]


def find_city(name: str) -> Optional[CryptoCity]:
    """Look up a city pin by name, ignoring case and surrounding spaces."""
    wanted = name.strip().lower()
    return next((city for city in CITIES if city.name.lower() == wanted), None)


def get_map() -> Dict[str, Any]:
    """Region and pins for the map screen."""
    return {
        "region": asdict(DEFAULT_REGION),
        "cities": [asdict(city) for city in CITIES],
    }
