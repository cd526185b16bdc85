"""Local store datasets that can be merged into live store results.

The demo supermarkets exist for presentation purposes; production callers
simply do not pass a local source.
"""

from __future__ import annotations

from typing import Dict, List, Mapping, Protocol, Sequence

from .models import Store

DEMO_ZIP_LITHONIA = "30058"
DEMO_ZIP_ATLANTA = "30332"


class StoreSource(Protocol):
    def stores_for(self, zip_code: str) -> List[Store]:
        ...


class DemoStoreSource:
    """Fixed store lists keyed by exact zip code."""

    def __init__(self, datasets: Mapping[str, Sequence[Store]]) -> None:
        self.datasets: Dict[str, List[Store]] = {
            zip_code: list(stores) for zip_code, stores in datasets.items()
        }

    def stores_for(self, zip_code: str) -> List[Store]:
        return list(self.datasets.get(zip_code, []))


def _demo_store(store_id: str, name: str, address: str, distance: float, lat: float, lng: float) -> Store:
    return Store(
        id=store_id,
        name=name,
        address=address,
        distance_miles=distance,
        supports_snap=False,
        latitude=lat,
        longitude=lng,
    )


DEMO_DATASETS: Dict[str, List[Store]] = {
    DEMO_ZIP_LITHONIA: [
        _demo_store("demo-super-1", "Kroger", "7167 Covington Hwy, Lithonia, GA 30058", 0.9, 33.718, -84.118),
        _demo_store("demo-super-2", "Publix", "6700 Covington Hwy, Lithonia, GA 30058", 1.4, 33.708, -84.125),
        _demo_store("demo-super-3", "Aldi", "7410 Covington Hwy, Lithonia, GA 30058", 1.1, 33.714, -84.122),
    ],
    DEMO_ZIP_ATLANTA: [
        _demo_store("demo-30332-1", "Kroger", "725 Ponce de Leon Ave NE, Atlanta, GA 30332", 1.2, 33.773, -84.366),
        _demo_store("demo-30332-2", "Publix", "950 Marietta St NW, Atlanta, GA 30332", 0.8, 33.778, -84.404),
        _demo_store("demo-30332-3", "Aldi", "840 North Ave NW, Atlanta, GA 30332", 1.0, 33.775, -84.391),
    ],
}


def default_demo_source() -> DemoStoreSource:
    return DemoStoreSource(DEMO_DATASETS)
