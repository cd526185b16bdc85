"""Store discovery: map SNAP retailer records, merge local datasets, rank by distance."""

from __future__ import annotations

import logging
import re
from typing import Iterable, List, Optional, Sequence

from .client import PlannerApiClient
from .fixtures import StoreSource
from .models import Store, is_number

logger = logging.getLogger(__name__)

SNAP_STORE_ID_PREFIX = "snap-"
DEFAULT_STORE_NAME = "SNAP Store"
# The retailer dataset writes missing secondary address lines as "nan".
MISSING_ADDRESS_MARKER = "nan"

RADIUS_CHOICES = (1, 3, 5, 10)
DEFAULT_RADIUS_MILES = 5


def _text(value) -> str:
    return value.strip() if isinstance(value, str) else ""


def format_snap_store_address(record: dict) -> str:
    parts: List[str] = []
    for key in ("street_number", "street_name"):
        part = _text(record.get(key))
        if part:
            parts.append(part)

    additional = _text(record.get("additional_address"))
    if additional and additional != MISSING_ADDRESS_MARKER:
        parts.append(additional)

    city_state_zip = ", ".join(
        part for part in (_text(record.get(key)) for key in ("city", "state", "zip_code")) if part
    )
    if city_state_zip:
        parts.append(city_state_zip)
    return " ".join(parts)


def map_snap_store(record: dict) -> Store:
    """Map a record from the SNAP retailer endpoint.

    That endpoint only lists SNAP retailers and carries no ingredient data, so
    every store accepts SNAP and availability stays at the zero placeholder.
    """

    record_id = record.get("record_id")
    latitude = record.get("latitude")
    longitude = record.get("longitude")
    geocoded = is_number(latitude) and is_number(longitude)
    return Store(
        id=f"{SNAP_STORE_ID_PREFIX}{'' if record_id is None else record_id}",
        name=_text(record.get("store_name")) or DEFAULT_STORE_NAME,
        address=format_snap_store_address(record),
        distance_miles=record.get("distance_miles"),
        supports_snap=True,
        latitude=latitude if geocoded else None,
        longitude=longitude if geocoded else None,
    )


def usable_snap_records(records: Iterable) -> List[dict]:
    """Drop records without a numeric distance and sort the rest, nearest first."""

    usable = []
    for record in records:
        if isinstance(record, dict) and is_number(record.get("distance_miles")):
            usable.append(record)
        else:
            logger.debug("Skipping SNAP record without a distance: %r", record)
    return sorted(usable, key=lambda record: record["distance_miles"])


def merge_stores(snap_stores: Sequence[Store], local_stores: Sequence[Store]) -> List[Store]:
    # sorted() is stable, so SNAP stores win ties against local ones.
    return sorted([*snap_stores, *local_stores], key=lambda store: store.distance_miles)


def filter_stores(
    stores: Iterable[Store],
    radius_miles: float = DEFAULT_RADIUS_MILES,
    snap_only: bool = True,
) -> List[Store]:
    kept = [
        store
        for store in stores
        if store.distance_miles <= radius_miles and (store.supports_snap or not snap_only)
    ]
    return sorted(kept, key=lambda store: store.distance_miles)


def normalize_zip(text: str) -> str:
    return re.sub(r"\D", "", text or "")[:5]


class StoreAggregator:
    """Fetches SNAP stores for a zip code and merges in local datasets."""

    def __init__(
        self,
        client: PlannerApiClient,
        local_sources: Optional[Sequence[StoreSource]] = None,
    ) -> None:
        self.client = client
        self.local_sources: List[StoreSource] = list(local_sources or [])

    def local_stores(self, zip_code: str) -> List[Store]:
        stores: List[Store] = []
        for source in self.local_sources:
            stores.extend(source.stores_for(zip_code))
        return stores

    def find_stores(self, zip_code: str) -> List[Store]:
        """Return every known store for ``zip_code``, nearest first.

        Raises:
            ApiError: the SNAP store request failed; no local stores are
                returned in that case.
        """
        records = usable_snap_records(self.client.fetch_snap_stores(zip_code))
        snap_stores = [map_snap_store(record) for record in records]
        local = self.local_stores(zip_code)
        logger.info(
            "Found %d SNAP stores and %d local stores for %s",
            len(snap_stores),
            len(local),
            zip_code,
        )
        return merge_stores(snap_stores, local)
