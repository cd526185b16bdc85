"""Pick a map viewport that shows every geocoded store."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from .models import Store

# Geographic center of the contiguous United States.
DEFAULT_CENTER: Tuple[float, float] = (39.8283, -98.5795)
DEFAULT_ZOOM = 4
SINGLE_STORE_ZOOM = 14
MULTI_STORE_ZOOM = 11
BOUNDS_PADDING_PX = 24
MAX_ZOOM = 14
TILE_SIZE_PX = 256
DEFAULT_VIEWPORT_PX = (600, 500)

STRATEGIES = ("bounds", "centroid")


@dataclass(frozen=True)
class MapViewport:
    has_data: bool
    center: Tuple[float, float]
    zoom: int
    # (south, west, north, east); only set by the bounds strategy.
    bounds: Optional[Tuple[float, float, float, float]] = None
    padding: int = 0
    max_zoom: Optional[int] = None

    def to_dict(self) -> dict:
        return {
            "has_data": self.has_data,
            "center": list(self.center),
            "zoom": self.zoom,
            "bounds": list(self.bounds) if self.bounds is not None else None,
            "padding": self.padding,
            "max_zoom": self.max_zoom,
        }


def geocoded_stores(stores: Iterable[Store]) -> List[Store]:
    return [store for store in stores if store.has_coordinates]


def _mercator_y(latitude: float) -> float:
    radians = math.radians(max(min(latitude, 85.0511), -85.0511))
    return math.log(math.tan(math.pi / 4 + radians / 2))


def fit_zoom(
    bounds: Tuple[float, float, float, float],
    viewport_px: Tuple[int, int] = DEFAULT_VIEWPORT_PX,
    padding: int = BOUNDS_PADDING_PX,
    max_zoom: int = MAX_ZOOM,
) -> int:
    """Largest whole zoom level at which ``bounds`` fits inside the viewport."""

    south, west, north, east = bounds
    width = max(viewport_px[0] - 2 * padding, 1)
    height = max(viewport_px[1] - 2 * padding, 1)

    lng_fraction = (east - west) / 360.0
    lat_fraction = (_mercator_y(north) - _mercator_y(south)) / (2 * math.pi)

    zooms = []
    if lng_fraction > 0:
        zooms.append(math.log2(width / TILE_SIZE_PX / lng_fraction))
    if lat_fraction > 0:
        zooms.append(math.log2(height / TILE_SIZE_PX / lat_fraction))
    if not zooms:
        return max_zoom
    return max(0, min(max_zoom, math.floor(min(zooms))))


def compute_map_viewport(
    stores: Iterable[Store],
    strategy: str = "bounds",
    viewport_px: Tuple[int, int] = DEFAULT_VIEWPORT_PX,
) -> MapViewport:
    """Viewport for the stores that carry both coordinates.

    With no geocoded store the viewport reports ``has_data=False`` and falls
    back to a wide view of the country.
    """

    if strategy not in STRATEGIES:
        raise ValueError(f"Unknown map strategy: {strategy}")

    located = geocoded_stores(stores)
    if not located:
        return MapViewport(has_data=False, center=DEFAULT_CENTER, zoom=DEFAULT_ZOOM)
    if len(located) == 1:
        only = located[0]
        return MapViewport(has_data=True, center=(only.latitude, only.longitude), zoom=SINGLE_STORE_ZOOM)

    latitudes = [store.latitude for store in located]
    longitudes = [store.longitude for store in located]

    if strategy == "centroid":
        center = (sum(latitudes) / len(latitudes), sum(longitudes) / len(longitudes))
        return MapViewport(has_data=True, center=center, zoom=MULTI_STORE_ZOOM)

    bounds = (min(latitudes), min(longitudes), max(latitudes), max(longitudes))
    south, west, north, east = bounds
    return MapViewport(
        has_data=True,
        center=((south + north) / 2, (west + east) / 2),
        zoom=fit_zoom(bounds, viewport_px),
        bounds=bounds,
        padding=BOUNDS_PADDING_PX,
        max_zoom=MAX_ZOOM,
    )
