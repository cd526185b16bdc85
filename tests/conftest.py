from __future__ import annotations

import pytest


@pytest.fixture
def snap_record():
    def _record(record_id: str, distance, **overrides) -> dict:
        record = {
            "record_id": record_id,
            "store_name": f"Store {record_id}",
            "store_type": "Convenience Store",
            "street_number": "100",
            "street_name": "Main St",
            "additional_address": "nan",
            "city": "Lithonia",
            "state": "GA",
            "zip_code": "30058",
            "zip4": "1234",
            "county": "DEKALB",
            "latitude": 33.71,
            "longitude": -84.1,
            "authorization_date": "2020-01-01",
            "end_date": "",
            "distance_miles": distance,
        }
        record.update(overrides)
        return record

    return _record
