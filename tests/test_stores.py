from __future__ import annotations

import pytest

from fakes import FakeClient
from snapmeals.client import ApiError
from snapmeals.fixtures import DEMO_DATASETS, DemoStoreSource, default_demo_source
from snapmeals.models import Store
from snapmeals.stores import (
    StoreAggregator,
    filter_stores,
    format_snap_store_address,
    map_snap_store,
    merge_stores,
    normalize_zip,
)


def _store(store_id: str, distance: float, snap: bool = True) -> Store:
    return Store(id=store_id, name=store_id, address="", distance_miles=distance, supports_snap=snap)


def test_format_address_skips_nan_secondary_line(snap_record):
    record = snap_record("1", 0.5, street_number=" 5410 ", street_name="Covington Hwy")

    address = format_snap_store_address(record)

    assert address == "5410 Covington Hwy Lithonia, GA, 30058"
    assert "nan" not in address


def test_format_address_keeps_real_secondary_line_and_drops_blank_parts(snap_record):
    record = snap_record(
        "1",
        0.5,
        street_number="",
        additional_address="Suite 4",
        state="  ",
        zip_code=None,
    )

    assert format_snap_store_address(record) == "Main St Suite 4 Lithonia"


def test_map_snap_store(snap_record):
    store = map_snap_store(snap_record("77", 2.4, store_name="  Corner Mart "))

    assert store.id == "snap-77"
    assert store.name == "Corner Mart"
    assert store.distance_miles == 2.4
    assert store.supports_snap is True
    assert (store.availability.have_count, store.availability.total_count) == (0, 0)
    assert store.matched_ingredients == []
    assert store.missing_ingredients == []
    assert (store.latitude, store.longitude) == (33.71, -84.1)


def test_map_snap_store_fallbacks(snap_record):
    store = map_snap_store(snap_record("8", 1.0, store_name="   ", latitude=33.7, longitude="nan"))

    assert store.name == "SNAP Store"
    assert store.latitude is None
    assert store.longitude is None
    assert not store.has_coordinates


def test_aggregator_merges_demo_stores_for_demo_zip(snap_record):
    client = FakeClient(stores=[snap_record("1", 2.0)])
    aggregator = StoreAggregator(client, [default_demo_source()])

    stores = aggregator.find_stores("30058")

    assert client.zip_codes == ["30058"]
    assert [store.id for store in stores] == ["demo-super-1", "demo-super-3", "demo-super-2", "snap-1"]
    distances = [store.distance_miles for store in stores]
    assert distances == sorted(distances)


def test_aggregator_contains_every_store_once(snap_record):
    client = FakeClient(stores=[snap_record("a", 1.0), snap_record("b", 0.2), snap_record("c", 3.3)])
    aggregator = StoreAggregator(client, [default_demo_source()])

    stores = aggregator.find_stores("30332")

    ids = [store.id for store in stores]
    expected = {"snap-a", "snap-b", "snap-c"} | {store.id for store in DEMO_DATASETS["30332"]}
    assert sorted(ids) == sorted(expected)
    assert len(ids) == len(set(ids))
    distances = [store.distance_miles for store in stores]
    assert distances == sorted(distances)


def test_aggregator_drops_records_without_distance(snap_record):
    client = FakeClient(
        stores=[
            snap_record("ok", 1.5),
            snap_record("text", "1.0"),
            snap_record("missing", None),
            "garbage",
            None,
        ]
    )

    stores = StoreAggregator(client).find_stores("10001")

    assert [store.id for store in stores] == ["snap-ok"]


def test_aggregator_keeps_response_order_for_equal_distances(snap_record):
    client = FakeClient(stores=[snap_record("x", 1.0), snap_record("y", 0.5), snap_record("z", 1.0)])

    stores = StoreAggregator(client).find_stores("10001")

    assert [store.id for store in stores] == ["snap-y", "snap-x", "snap-z"]


def test_aggregator_without_local_sources_ignores_demo_zip(snap_record):
    client = FakeClient(stores=[snap_record("1", 2.0)])

    stores = StoreAggregator(client).find_stores("30058")

    assert [store.id for store in stores] == ["snap-1"]


def test_aggregator_propagates_fetch_errors():
    client = FakeClient(error=ApiError("SNAP stores API error 503: down", status_code=503, body="down"))
    aggregator = StoreAggregator(client, [default_demo_source()])

    with pytest.raises(ApiError) as excinfo:
        aggregator.find_stores("30058")
    assert excinfo.value.status_code == 503


def test_merge_stores_puts_snap_stores_first_on_ties():
    merged = merge_stores([_store("snap-1", 1.0)], [_store("demo-1", 1.0, snap=False), _store("demo-2", 0.5)])
    assert [store.id for store in merged] == ["demo-2", "snap-1", "demo-1"]


def test_filter_stores_by_radius_and_snap():
    stores = [_store("far", 7.5), _store("near", 0.8), _store("no-snap", 1.1, snap=False), _store("edge", 5.0)]

    assert [store.id for store in filter_stores(stores)] == ["near", "edge"]
    assert [store.id for store in filter_stores(stores, radius_miles=1)] == ["near"]
    assert [store.id for store in filter_stores(stores, radius_miles=10, snap_only=False)] == [
        "near",
        "no-snap",
        "edge",
        "far",
    ]


def test_demo_store_source_only_matches_exact_zip():
    source = DemoStoreSource({"12345": [_store("demo", 1.0, snap=False)]})

    assert [store.id for store in source.stores_for("12345")] == ["demo"]
    assert source.stores_for("1234") == []
    assert all(not store.supports_snap for stores in DEMO_DATASETS.values() for store in stores)


def test_normalize_zip():
    assert normalize_zip(" 30058-1234 ") == "30058"
    assert normalize_zip("3a0b0") == "300"
    assert normalize_zip("") == ""
